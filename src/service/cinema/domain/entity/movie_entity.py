import attrs


@attrs.define(frozen=True)
class Movie:
    id: str
    title: str
    language: str
    duration_minutes: int
    genre: str
