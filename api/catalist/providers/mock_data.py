"""Static fallback datasets, stored in each provider's own wire shape.

Adapters run these through the same normalizers as live payloads, so a mock answer
is indistinguishable from a live one apart from ``ProviderResponse.fallback``.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

TMDB_RESULTS: list[dict[str, Any]] = [
    {
        "id": 27205,
        "media_type": "movie",
        "title": "Inception",
        "overview": "A thief who steals corporate secrets through dream-sharing technology is given the task of planting an idea into the mind of a C.E.O.",
        "release_date": "2010-07-16",
        "poster_path": "/oYuLEt3zVCKq57qu2F8dT7NIa6f.jpg",
        "vote_average": 8.4,
        "genres": ["Action", "Science Fiction", "Adventure"],
    },
    {
        "id": 278,
        "media_type": "movie",
        "title": "The Shawshank Redemption",
        "overview": "Imprisoned in the 1940s for the double murder of his wife and her lover, a banker begins a new life at Shawshank prison.",
        "release_date": "1994-09-23",
        "poster_path": "/9cqNxx0GxF0bflZmeSMuL5tnGzr.jpg",
        "vote_average": 8.7,
        "genres": ["Drama", "Crime"],
    },
    {
        "id": 129,
        "media_type": "movie",
        "title": "Spirited Away",
        "overview": "A young girl wanders into a world ruled by gods, witches and spirits, where humans are changed into beasts.",
        "release_date": "2001-07-20",
        "poster_path": "/39wmItIWsg5sZMyRUHLkWBcuVCM.jpg",
        "vote_average": 8.5,
        "genres": ["Animation", "Family", "Fantasy"],
    },
    {
        "id": 496243,
        "media_type": "movie",
        "title": "Parasite",
        "overview": "All unemployed, Ki-taek's family takes peculiar interest in the wealthy Park family.",
        "release_date": "2019-05-30",
        "poster_path": "/7IiTTgloJzvGI1TAYymCfbfl3vT.jpg",
        "vote_average": 8.5,
        "genres": ["Comedy", "Thriller", "Drama"],
    },
    {
        "id": 1396,
        "media_type": "tv",
        "name": "Breaking Bad",
        "overview": "A chemistry teacher diagnosed with terminal lung cancer turns to manufacturing and selling methamphetamine.",
        "first_air_date": "2008-01-20",
        "poster_path": "/ztkUQFLlC19CCMYHW9o1zWhJRNq.jpg",
        "vote_average": 8.9,
        "genres": ["Drama", "Crime"],
    },
    {
        "id": 70523,
        "media_type": "tv",
        "name": "Dark",
        "overview": "A missing child causes four families to help each other for answers in a small German town.",
        "first_air_date": "2017-12-01",
        "poster_path": "/apbrbWs8M9lyOpJYU5WXrpFbk1Z.jpg",
        "vote_average": 8.4,
        "genres": ["Mystery", "Sci-Fi & Fantasy", "Drama"],
    },
    {
        "id": 525,
        "media_type": "person",
        "name": "Christopher Nolan",
        "known_for_department": "Directing",
        "profile_path": "/xuAIuYSmsUzKlUMBFGVZaWsY3DZ.jpg",
        "popularity": 12.1,
    },
]

BOOK_VOLUMES: list[dict[str, Any]] = [
    {
        "id": "kotPYEqx7kMC",
        "volumeInfo": {
            "title": "1984",
            "authors": ["George Orwell"],
            "publishedDate": "1949-06-08",
            "description": "A dystopian social science fiction novel and cautionary tale.",
            "categories": ["Fiction"],
            "imageLinks": {
                "smallThumbnail": "http://books.google.com/books/content?id=kotPYEqx7kMC&printsec=frontcover&img=1&zoom=5",
                "thumbnail": "http://books.google.com/books/content?id=kotPYEqx7kMC&printsec=frontcover&img=1&zoom=1",
            },
            "infoLink": "https://books.google.com/books?id=kotPYEqx7kMC",
        },
    },
    {
        "id": "PGR2AwAAQBAJ",
        "volumeInfo": {
            "title": "To Kill a Mockingbird",
            "authors": ["Harper Lee"],
            "publishedDate": "1960-07-11",
            "description": "The unforgettable novel of a childhood in a sleepy Southern town and the crisis of conscience that rocked it.",
            "categories": ["Fiction"],
            "imageLinks": {
                "thumbnail": "http://books.google.com/books/content?id=PGR2AwAAQBAJ&printsec=frontcover&img=1&zoom=1",
            },
        },
    },
    {
        "id": "B1hSG45JCX4C",
        "volumeInfo": {
            "title": "Dune",
            "authors": ["Frank Herbert"],
            "publishedDate": "1965",
            "description": "Set on the desert planet Arrakis, the story of the boy Paul Atreides.",
            "categories": ["Science Fiction"],
            "imageLinks": {
                "thumbnail": "http://books.google.com/books/content?id=B1hSG45JCX4C&printsec=frontcover&img=1&zoom=1",
            },
        },
    },
    {
        "id": "pD6arNyKyi8C",
        "volumeInfo": {
            "title": "The Hobbit",
            "authors": ["J.R.R. Tolkien"],
            "publishedDate": "1937-09-21",
            "description": "Bilbo Baggins is swept into a quest to reclaim the dwarves' treasure.",
            "categories": ["Fantasy"],
        },
    },
    {
        "id": "FmyBAwAAQBAJ",
        "volumeInfo": {
            "title": "Sapiens",
            "subtitle": "A Brief History of Humankind",
            "authors": ["Yuval Noah Harari"],
            "publishedDate": "2014-09-04",
            "description": "A sweeping history of the human species from the Stone Age to the twenty-first century.",
            "categories": ["History"],
            "imageLinks": {
                "thumbnail": "http://books.google.com/books/content?id=FmyBAwAAQBAJ&printsec=frontcover&img=1&zoom=1",
            },
        },
    },
]

RAWG_GAMES: list[dict[str, Any]] = [
    {
        "id": 3328,
        "slug": "the-witcher-3-wild-hunt",
        "name": "The Witcher 3: Wild Hunt",
        "released": "2015-05-18",
        "background_image": "https://media.rawg.io/media/games/618/618c2031a07bbff6b4f611f10b6bcdbc.jpg",
        "rating": 4.66,
        "genres": [{"name": "Action"}, {"name": "RPG"}],
        "platforms": [
            {"platform": {"name": "PC"}},
            {"platform": {"name": "PlayStation 4"}},
            {"platform": {"name": "Xbox One"}},
            {"platform": {"name": "Nintendo Switch"}},
        ],
    },
    {
        "id": 28,
        "slug": "red-dead-redemption-2",
        "name": "Red Dead Redemption 2",
        "released": "2018-10-26",
        "background_image": "https://media.rawg.io/media/games/511/5118aff5091cb3efec399c808f8c598f.jpg",
        "rating": 4.59,
        "genres": [{"name": "Action"}, {"name": "Adventure"}],
        "platforms": [{"platform": {"name": "PC"}}, {"platform": {"name": "PlayStation 4"}}],
    },
    {
        "id": 4200,
        "slug": "portal-2",
        "name": "Portal 2",
        "released": "2011-04-18",
        "background_image": "https://media.rawg.io/media/games/2ba/2bac0e87cf45e5b508f227d281c9252a.jpg",
        "rating": 4.61,
        "genres": [{"name": "Puzzle"}, {"name": "Shooter"}],
        "platforms": [{"platform": {"name": "PC"}}, {"platform": {"name": "Xbox 360"}}],
    },
    {
        "id": 10035,
        "slug": "stardew-valley",
        "name": "Stardew Valley",
        "released": "2016-02-26",
        "background_image": "https://media.rawg.io/media/games/713/713269608dc8f2f40f5a670a14b2de94.jpg",
        "rating": 4.4,
        "genres": [{"name": "Simulation"}, {"name": "Indie"}],
        "platforms": [{"platform": {"name": "PC"}}, {"platform": {"name": "Nintendo Switch"}}],
    },
    {
        "id": 274755,
        "slug": "hades",
        "name": "Hades",
        "released": "2020-09-17",
        "background_image": None,
        "rating": 4.49,
        "genres": [{"name": "Action"}, {"name": "Indie"}],
        "platforms": [{"platform": {"name": "PC"}}],
    },
]

PLACE_RESULTS: list[dict[str, Any]] = [
    {
        "place_id": "ChIJ4S8bP1e5yhQRSTqA0Yxk0nU",
        "name": "Hagia Sophia",
        "formatted_address": "Sultan Ahmet, Ayasofya Meydanı No:1, 34122 Fatih/İstanbul, Türkiye",
        "types": ["mosque", "tourist_attraction", "place_of_worship"],
        "rating": 4.8,
    },
    {
        "place_id": "ChIJ0c3JZ2O3yhQRYcyb4l3x1Dk",
        "name": "Galata Tower",
        "formatted_address": "Bereketzade, Galata Kulesi, 34421 Beyoğlu/İstanbul, Türkiye",
        "types": ["tourist_attraction", "museum"],
        "rating": 4.6,
    },
    {
        "place_id": "ChIJ2Rkc4Ei5yhQRHA2C6OJS3Lk",
        "name": "Grand Bazaar",
        "vicinity": "Beyazıt, Fatih",
        "types": ["shopping_mall", "tourist_attraction"],
        "rating": 4.4,
    },
    {
        "place_id": "ChIJ4zGFAZpYwokRGUGph3Mf37k",
        "name": "Central Park",
        "formatted_address": "New York, NY, USA",
        "types": ["park", "tourist_attraction"],
        "rating": 4.8,
    },
    {
        "place_id": "ChIJD3uTd9hx5kcR1IQvGfr8dbk",
        "name": "Louvre Museum",
        "formatted_address": "Rue de Rivoli, 75001 Paris, France",
        "types": ["art_gallery", "museum"],
        "rating": 4.7,
    },
]

YOUTUBE_VIDEOS: list[dict[str, Any]] = [
    {
        "id": "dQw4w9WgXcQ",
        "snippet": {
            "title": "Rick Astley - Never Gonna Give You Up (Official Music Video)",
            "channelTitle": "Rick Astley",
            "description": "The official video for Never Gonna Give You Up.",
            "publishedAt": "2009-10-25T06:57:33Z",
            "thumbnails": {"high": {"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/hqdefault.jpg"}},
        },
        "statistics": {"viewCount": "1500000000"},
        "contentDetails": {"duration": "PT3M33S"},
    },
    {
        "id": "jNQXAC9IVRw",
        "snippet": {
            "title": "Me at the zoo",
            "channelTitle": "jawed",
            "description": "The first video on the platform.",
            "publishedAt": "2005-04-24T03:31:52Z",
            "thumbnails": {"high": {"url": "https://i.ytimg.com/vi/jNQXAC9IVRw/hqdefault.jpg"}},
        },
        "statistics": {"viewCount": "320000000"},
        "contentDetails": {"duration": "PT19S"},
    },
    {
        "id": "aircAruvnKk",
        "snippet": {
            "title": "But what is a neural network?",
            "channelTitle": "3Blue1Brown",
            "description": "Deep learning, chapter 1.",
            "publishedAt": "2017-10-05T15:06:45Z",
            "thumbnails": {},
        },
        "statistics": {"viewCount": "18500"},
        "contentDetails": {"duration": "PT1H18M35S"},
    },
]

MOCK_USERS: list[dict[str, Any]] = [
    {
        "id": "mock-user-1",
        "username": "john_doe",
        "full_name": "John Doe",
        "avatar_url": "https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?w=150",
        "bio": "Coffee lover and weekend hiker.",
        "followers_count": 125,
    },
    {
        "id": "mock-user-2",
        "username": "sarah_wilson",
        "full_name": "Sarah Wilson",
        "avatar_url": "https://images.unsplash.com/photo-1494790108755-2616b612b786?w=150",
        "bio": "Bookworm. Collects lists of everything.",
        "followers_count": 342,
    },
    {
        "id": "mock-user-3",
        "username": "alex_tech",
        "full_name": "Alex Thompson",
        "avatar_url": "https://images.unsplash.com/photo-1472099645785-5658abf4ff4e?w=150",
        "bio": "Games, gadgets and film scores.",
        "followers_count": 89,
    },
]


def _lookup(payload: Any, path: str) -> Any:
    current = payload
    for part in path.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
    return current


def _flatten(value: Any) -> Iterable[str]:
    if value is None:
        return
    if isinstance(value, str):
        yield value
    elif isinstance(value, dict):
        for nested in value.values():
            yield from _flatten(nested)
    elif isinstance(value, (list, tuple)):
        for nested in value:
            yield from _flatten(nested)
    else:
        yield str(value)


def filter_mock(
    dataset: Sequence[dict[str, Any]],
    query: str,
    fields: Sequence[str],
) -> list[dict[str, Any]]:
    """Case-insensitive substring filter over the given dotted field paths.

    A blank query or zero matches returns the whole dataset, so fallback answers are
    never empty.
    """
    needle = (query or "").strip().casefold()
    if not needle:
        return list(dataset)
    matches = [
        entry
        for entry in dataset
        if any(needle in text.casefold() for path in fields for text in _flatten(_lookup(entry, path)))
    ]
    return matches or list(dataset)
