"""Seed items shared by service tests (raw seed-file shape)."""

SEED_ITEMS = [
    {
        "id": "fl-tanaka",
        "title": "Taro Tanaka | Facelook",
        "url": "https://facelook.com/tanaka.taro",
        "description": "Works at ABC Corporation.",
        "keywords": ["facelook", "tanaka"],
        "template": "FacelookProfilePage",
        "content": {"name": "Taro Tanaka"},
    },
    {
        "id": "nitta",
        "title": "Nitta's Diary",
        "url": "https://nitta-blog.example/2024/03/hike",
        "description": "Spring hike near Takao.",
        "keywords": ["nitta", "blog"],
        "template": "NittaBlogPage",
        "content": {"body": "We reached the summit."},
        "archivedDate": "2024-03-15",
    },
    {
        "id": "old-shop",
        "title": "Tanaka Bakery",
        "url": "https://tanaka-bakery.example/",
        "description": "Family bakery.",
        "keywords": ["bakery"],
        "template": "GenericPage",
        "content": {},
        "domainStatus": "expired",
    },
]
