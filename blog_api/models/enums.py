"""Enums for model fields."""

from enum import Enum


class PostCategory(str, Enum):
    """Categories a post can be filed under."""

    FANTASY = "Fantasy"
    SCIENCE_FICTION = "Science-Fiction"
    ROMANCE = "Romance"
    MYSTERY_THRILLER = "Mystery-Thriller"
    HISTORICAL_FICTION = "Historical-Fiction"
    NON_FICTION = "Non-Fiction"
    YOUNG_ADULT = "Young-Adult"
    CHILDRENS_BOOKS = "Children's-Books"
    ANIME_MANGA = "Anime-Manga"
    NOVELS_COMICS = "Novels-Comics"

    @classmethod
    def values(cls) -> list[str]:
        return [category.value for category in cls]
