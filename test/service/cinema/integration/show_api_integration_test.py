from fastapi.testclient import TestClient
import pytest

from src.platform.constant.route_constant import (
    HEALTH,
    METRICS,
    MOVIE_BASE,
    SHOW_BASE,
    SHOW_GET,
    SHOW_SEATS,
)
from test.constants import SEATS_PER_SHOW, SHOW_S101


pytestmark = pytest.mark.integration


class TestCatalogApi:
    def test_list_movies(self, client: TestClient) -> None:
        response = client.get(MOVIE_BASE)

        assert response.status_code == 200
        movies = response.json()
        assert [movie['id'] for movie in movies] == ['M001', 'M002', 'M003']
        assert movies[1]['title'] == 'Dil Se Again'
        assert movies[1]['language'] == 'Hindi'

    def test_list_shows_in_start_time_order(self, client: TestClient) -> None:
        response = client.get(SHOW_BASE)

        assert response.status_code == 200
        shows = response.json()
        assert [show['id'] for show in shows] == ['S101', 'S201', 'S102', 'S301']
        assert all(show['available_seats'] == SEATS_PER_SHOW for show in shows)

    def test_list_shows_of_one_movie(self, client: TestClient) -> None:
        response = client.get(SHOW_BASE, params={'movie_id': 'm001'})

        assert [show['id'] for show in response.json()] == ['S101', 'S102']

    def test_get_show(self, client: TestClient) -> None:
        response = client.get(SHOW_GET.format(show_id='s101'))

        assert response.status_code == 200
        body = response.json()
        assert body['movie_title'] == 'The Timekeeper'
        assert body['price_per_seat'] == '200.00'
        assert body['total_seats'] == SEATS_PER_SHOW

    def test_unknown_show_is_404(self, client: TestClient) -> None:
        response = client.get(SHOW_GET.format(show_id='S999'))

        assert response.status_code == 404
        assert response.json() == {'detail': 'Show S999 not found'}

    def test_seat_map(self, client: TestClient) -> None:
        response = client.get(SHOW_SEATS.format(show_id=SHOW_S101))

        assert response.status_code == 200
        body = response.json()
        assert body['available_seats'] == SEATS_PER_SHOW
        assert body['seats'][0] == {'seat_id': 'A1', 'state': 'available'}
        assert body['rendered'].startswith('Seat legend: [O] available  [X] booked')

    def test_seat_map_of_unknown_show_is_404(self, client: TestClient) -> None:
        assert client.get(SHOW_SEATS.format(show_id='S999')).status_code == 404


class TestCommonEndpoints:
    def test_health(self, client: TestClient) -> None:
        response = client.get(HEALTH)

        assert response.status_code == 200
        assert response.json()['status'] == 'healthy'

    def test_metrics_expose_reservation_counters(self, client: TestClient) -> None:
        response = client.get(METRICS)

        assert response.status_code == 200
        assert 'seat_reservation_requests_total' in response.text
