"""Bundled catalog data used on first run and whenever the remote is unavailable."""

from __future__ import annotations

from symbol_catalog.models import CategoryInfo

# Foundational categories. Non-standard entries are always present; standard
# entries here fix the preferred spelling when the remote returns them too.
BASE_CATEGORIES: list[CategoryInfo] = [
    CategoryInfo(id="cat_contextual", name="contextual", is_standard=False),
    CategoryInfo(id="cat_custom", name="custom", is_standard=False),
    CategoryInfo(id="cat_food", name="food", is_standard=True),
]

# Lowercase category name -> seed keywords
DEFAULT_CATEGORY_KEYWORDS: dict[str, list[str]] = {
    "food": [
        "apple", "banana", "bread", "water", "milk", "juice", "eat", "hungry",
        "more", "finished", "orange", "pizza", "cookie", "cake", "cheese",
    ],
    "drinks": [
        "water", "milk", "juice", "drink", "thirsty", "cup", "bottle", "soda",
        "tea", "coffee",
    ],
    "people": [
        "mom", "dad", "teacher", "friend", "boy", "girl", "baby", "me", "you",
        "doctor", "police", "man", "woman",
    ],
    "animals": [
        "dog", "cat", "bird", "fish", "bear", "lion", "horse", "cow", "pig",
        "duck", "frog",
    ],
    "toys": [
        "ball", "doll", "car", "blocks", "puzzle", "play", "game", "bike",
        "train", "plane",
    ],
    "places": [
        "home", "school", "park", "store", "playground", "house", "room",
        "outside", "library", "hospital",
    ],
    "actions": [
        "eat", "drink", "play", "go", "stop", "want", "help", "look", "listen",
        "sleep", "run", "walk", "jump", "read", "write", "open", "close", "give",
        "take", "wash",
    ],
    "feelings": [
        "happy", "sad", "angry", "scared", "surprised", "tired", "hurt", "sick",
        "excited", "love",
    ],
    "clothing": [
        "shirt", "pants", "shoes", "socks", "hat", "jacket", "dress", "get dressed",
    ],
    "body parts": [
        "head", "eyes", "nose", "mouth", "ears", "hands", "feet", "arms", "legs",
        "tummy",
    ],
    "school": [
        "school", "teacher", "book", "pencil", "paper", "read", "write", "learn",
        "bus", "backpack", "desk", "chair",
    ],
    "colors": [
        "red", "blue", "green", "yellow", "orange", "purple", "pink", "brown",
        "black", "white", "color",
    ],
    "numbers": [
        "one", "two", "three", "four", "five", "six", "seven", "eight", "nine",
        "ten", "number", "count",
    ],
}
