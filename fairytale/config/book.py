"""
Book request constants for the Fairy Tale Book Generator.

Bounds enforced on incoming requests, plus the shape the prompt asks for.
"""

BOOK_CONSTANTS = {
    "max_name_length": 50,
    "max_topic_length": 1000,
    "min_age": 1,
    "max_age": 99,
    "genders": ("boy", "girl"),
    "scene_count": 14,  # Requested of the model, not enforced on output
    "min_word_count": 700,
    "max_word_count": 1200,
}

# Rate limiting: 5 requests per source address per 30 minutes
RATE_LIMIT_CONSTANTS = {
    "max_requests": 5,
    "window_seconds": 1800,
}
