"""
Shared fixtures for the nlsearch test suite.
"""

import sys
from pathlib import Path

import pytest

# Ensure the src/ directory is on the import path so that
# nlsearch.core.config / nlsearch.core.engine / etc. can be imported.
SRC_ROOT = Path(__file__).resolve().parent.parent / "src"
sys.path.insert(0, str(SRC_ROOT))

from nlsearch.core.analysis import PorterAnalyzer  # noqa: E402
from nlsearch.core.config import NLSearchConfig  # noqa: E402


@pytest.fixture
def config() -> NLSearchConfig:
    """Config with library defaults, independent of NLSEARCH_* env vars."""
    return NLSearchConfig()


@pytest.fixture
def analyzer() -> PorterAnalyzer:
    return PorterAnalyzer()


# =============================================================================
# Fixtures — sample trees
# =============================================================================

@pytest.fixture
def employees() -> list:
    """Three employees with nested skills and projects."""
    return [
        {
            "id": 1,
            "name": "John Doe",
            "role": "Software Engineer",
            "department": "Engineering",
            "skills": ["JavaScript", "TypeScript", "React"],
            "projects": [
                {"name": "E-commerce Platform", "status": "completed"},
                {"name": "Mobile App", "status": "in progress"},
            ],
        },
        {
            "id": 2,
            "name": "Jane Smith",
            "role": "Product Manager",
            "department": "Product",
            "skills": ["Product Strategy", "Roadmap Planning", "User Research"],
            "projects": [
                {"name": "Customer Analytics Dashboard", "status": "completed"},
            ],
        },
        {
            "id": 3,
            "name": "Bob Johnson",
            "role": "Senior Developer",
            "department": "Engineering",
            "skills": ["Python", "Machine Learning", "Data Science"],
            "projects": [
                {"name": "AI Recommendation Engine", "status": "in progress"},
                {"name": "Data Pipeline", "status": "completed"},
            ],
        },
    ]


@pytest.fixture
def users() -> dict:
    return {
        "users": [
            {"name": "Alice", "age": 30, "city": "New York"},
            {"name": "Bob", "age": 25, "city": "Los Angeles"},
            {"name": "Charlie", "age": 35, "city": "Chicago"},
        ]
    }


@pytest.fixture
def departments() -> dict:
    """Four levels of nesting: departments → teams → members."""
    return {
        "departments": [
            {
                "name": "Sales",
                "teams": [
                    {
                        "name": "Enterprise Sales",
                        "members": [
                            {"name": "Sarah", "quota": 500000},
                            {"name": "Mike", "quota": 450000},
                        ],
                    }
                ],
            },
            {
                "name": "Marketing",
                "teams": [
                    {
                        "name": "Digital Marketing",
                        "members": [
                            {"name": "Emma", "specialty": "SEO"},
                            {"name": "Lucas", "specialty": "Content Marketing"},
                        ],
                    }
                ],
            },
        ]
    }


@pytest.fixture
def json_file(tmp_path: Path, users) -> Path:
    """The users tree written to a JSON file."""
    import json

    path = tmp_path / "users.json"
    path.write_text(json.dumps(users), encoding="utf-8")
    return path
