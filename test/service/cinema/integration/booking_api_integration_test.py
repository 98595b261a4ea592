"""
Integration tests for the booking API

Drives the FastAPI test app end to end: reservation, lookup, cancellation,
error status mapping and the on-disk ledger.
"""

from pathlib import Path
from typing import Any

from fastapi.testclient import TestClient
import orjson
import pytest

from src.platform.constant.route_constant import (
    BOOKING_BASE,
    BOOKING_CANCEL,
    BOOKING_GET,
    SHOW_SEATS,
    SYSTEM_SAVE,
)
from test.constants import SHOW_S101


pytestmark = pytest.mark.integration


def seat_states(client: TestClient, show_id: str) -> dict[str, str]:
    response = client.get(SHOW_SEATS.format(show_id=show_id))
    assert response.status_code == 200
    return {seat['seat_id']: seat['state'] for seat in response.json()['seats']}


class TestCreateBooking:
    def test_create_booking(self, client: TestClient, booking_payload: dict[str, Any]) -> None:
        response = client.post(BOOKING_BASE, json=booking_payload)

        assert response.status_code == 201
        body = response.json()
        assert body['id'] == 'B-0001'
        assert body['user'] == 'alice'
        assert body['seat_ids'] == ['A1', 'A2']
        assert body['amount'] == '400.00'
        states = seat_states(client, SHOW_S101)
        assert states['A1'] == states['A2'] == 'booked'
        assert states['A3'] == 'available'

    def test_seat_input_is_case_and_space_insensitive(self, client: TestClient) -> None:
        response = client.post(
            BOOKING_BASE, json={'user': 'alice', 'show_id': 's101', 'seat_ids': [' b3 ', 'B3']}
        )

        assert response.status_code == 201
        assert response.json()['seat_ids'] == ['B3']

    def test_booked_seats_are_409_with_seat_ids(
        self, client: TestClient, booking_payload: dict[str, Any]
    ) -> None:
        client.post(BOOKING_BASE, json=booking_payload)

        response = client.post(
            BOOKING_BASE, json={'user': 'bob', 'show_id': SHOW_S101, 'seat_ids': ['A2', 'A3']}
        )

        assert response.status_code == 409
        assert response.json()['seat_ids'] == ['A2']
        assert seat_states(client, SHOW_S101)['A3'] == 'available'

    def test_unknown_seat_is_400(self, client: TestClient) -> None:
        response = client.post(
            BOOKING_BASE, json={'user': 'alice', 'show_id': SHOW_S101, 'seat_ids': ['A1', 'Z1']}
        )

        assert response.status_code == 400
        assert response.json()['seat_ids'] == ['Z1']

    def test_empty_selection_is_400(self, client: TestClient) -> None:
        response = client.post(
            BOOKING_BASE, json={'user': 'alice', 'show_id': SHOW_S101, 'seat_ids': []}
        )

        assert response.status_code == 400
        assert response.json()['detail'] == 'No seats selected'

    def test_unknown_show_is_404(self, client: TestClient) -> None:
        response = client.post(
            BOOKING_BASE, json={'user': 'alice', 'show_id': 'S999', 'seat_ids': ['A1']}
        )

        assert response.status_code == 404

    def test_missing_user_is_rejected(self, client: TestClient) -> None:
        response = client.post(BOOKING_BASE, json={'show_id': SHOW_S101, 'seat_ids': ['A1']})

        assert response.status_code == 400

    def test_booking_is_saved_to_disk(
        self, client: TestClient, booking_payload: dict[str, Any], bookings_file: Path
    ) -> None:
        client.post(BOOKING_BASE, json=booking_payload)

        document = orjson.loads(bookings_file.read_bytes())
        assert list(document['bookings']) == ['B-0001']
        assert document['bookings']['B-0001']['seat_ids'] == ['A1', 'A2']


class TestQueryBookings:
    def test_get_booking(self, client: TestClient, booking_payload: dict[str, Any]) -> None:
        booking_id = client.post(BOOKING_BASE, json=booking_payload).json()['id']

        response = client.get(BOOKING_GET.format(booking_id=booking_id.lower()))

        assert response.status_code == 200
        assert response.json()['id'] == booking_id

    def test_unknown_booking_is_404(self, client: TestClient) -> None:
        assert client.get(BOOKING_GET.format(booking_id='B-9999')).status_code == 404

    def test_list_bookings_of_a_user(self, client: TestClient) -> None:
        client.post(BOOKING_BASE, json={'user': 'Alice', 'show_id': 'S101', 'seat_ids': ['A1']})
        client.post(BOOKING_BASE, json={'user': 'bob', 'show_id': 'S101', 'seat_ids': ['A2']})
        client.post(BOOKING_BASE, json={'user': 'alice', 'show_id': 'S201', 'seat_ids': ['A1']})

        response = client.get(BOOKING_BASE, params={'user': 'ALICE'})

        assert response.status_code == 200
        assert [b['id'] for b in response.json()] == ['B-0001', 'B-0003']

    def test_user_without_bookings(self, client: TestClient) -> None:
        response = client.get(BOOKING_BASE, params={'user': 'nobody'})

        assert response.status_code == 200
        assert response.json() == []


class TestCancelBooking:
    def test_cancel_frees_seats_and_reports_refund(
        self, client: TestClient, booking_payload: dict[str, Any]
    ) -> None:
        booking_id = client.post(BOOKING_BASE, json=booking_payload).json()['id']

        response = client.delete(BOOKING_CANCEL.format(booking_id=booking_id))

        assert response.status_code == 200
        assert response.json()['refunded_amount'] == '400.00'
        states = seat_states(client, SHOW_S101)
        assert states['A1'] == states['A2'] == 'available'
        assert client.get(BOOKING_GET.format(booking_id=booking_id)).status_code == 404

    def test_cancel_unknown_booking_is_404(self, client: TestClient) -> None:
        assert client.delete(BOOKING_CANCEL.format(booking_id='B-0404')).status_code == 404


class TestSaveAndRestart:
    def test_save_endpoint_reports_count(
        self, client: TestClient, booking_payload: dict[str, Any]
    ) -> None:
        client.post(BOOKING_BASE, json=booking_payload)

        response = client.post(SYSTEM_SAVE)

        assert response.status_code == 200
        assert response.json() == {'saved_bookings': 1}
