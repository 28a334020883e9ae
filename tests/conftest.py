from datetime import date

import pytest


@pytest.fixture
def valid_fields() -> dict:
    return {
        "slug": "exposing-modern-cpp-interface-from-win32-api",
        "main_title": "Win32 revisited",
        "sub_title": "A modern C++ interface over an old C API",
        "synopsis": "Can the Windows API be used from C++ without an intermediate layer?",
        "thumbnail": "handles-small.jpg",
        "hero_image": "michelange.jpg",
        "hero_image_width": 442,
        "hero_image_height": 200,
        "hero_image_caption": "Handles join the visible and the invisible.",
        "published_on": date(2014, 1, 8),
    }
