#!/usr/bin/env python3
"""
Manually try the nlsearch Python API on sample data.

Runs natural-language queries over an employee directory and a product
catalog, or over your own JSON file, and prints the ranked matches with
their paths.

Usage:
  # From project root
  python scripts/try_api.py
  python scripts/try_api.py --explain

  # Search your own document
  python scripts/try_api.py data.json "laptops in stock"

Requirements:
  - nlsearch installed (pip install -e . from project root)
"""

import sys
from pathlib import Path

# Optional: use src layout so "nlsearch" is importable without installing
_src = Path(__file__).resolve().parent.parent / "src"
if _src.exists() and str(_src) not in sys.path:
    sys.path.insert(0, str(_src))


EMPLOYEES = [
    {
        "id": 1,
        "name": "Alice Johnson",
        "role": "Senior Software Engineer",
        "department": "Engineering",
        "skills": ["JavaScript", "TypeScript", "React", "Node.js"],
        "projects": [
            {"name": "E-commerce Platform", "status": "completed", "priority": "high"},
            {"name": "Mobile App", "status": "in progress", "priority": "high"},
        ],
        "location": "San Francisco",
    },
    {
        "id": 2,
        "name": "Bob Smith",
        "role": "Product Manager",
        "department": "Product",
        "skills": ["Product Strategy", "Roadmap Planning", "User Research"],
        "projects": [
            {"name": "Customer Analytics Dashboard", "status": "completed", "priority": "medium"},
        ],
        "location": "New York",
    },
    {
        "id": 3,
        "name": "Carol Davis",
        "role": "Data Scientist",
        "department": "Engineering",
        "skills": ["Python", "Machine Learning", "Data Analysis", "SQL"],
        "projects": [
            {"name": "AI Recommendation Engine", "status": "in progress", "priority": "high"},
            {"name": "Data Pipeline Optimization", "status": "planning", "priority": "medium"},
        ],
        "location": "Austin",
    },
]

CATALOG = {
    "categories": [
        {
            "name": "Electronics",
            "products": [
                {"id": 101, "name": "Laptop Pro 15", "price": 1299, "inStock": True,
                 "features": ["16GB RAM", "512GB SSD"]},
                {"id": 102, "name": "Wireless Headphones", "price": 199, "inStock": False,
                 "features": ["Noise Cancelling", "30h Battery"]},
            ],
        },
        {
            "name": "Home & Kitchen",
            "products": [
                {"id": 201, "name": "Espresso Machine", "price": 449, "inStock": True,
                 "features": ["15 Bar Pump", "Milk Frother"]},
            ],
        },
    ]
}

EXAMPLES = [
    ("Employee directory", EMPLOYEES, [
        "who works in engineering?",
        "show me people with machine learning skills",
        "projects that are in progress",
    ]),
    ("Product catalog", CATALOG, [
        "laptop with ssd",
        "noise cancelling headphones",
        "coffee machine with milk frother",
    ]),
]


def main() -> None:
    import argparse
    from nlsearch import DataLoadError, NLSearch, load_json
    from nlsearch.core.search import ResultFormatter

    parser = argparse.ArgumentParser(
        description="Try the nlsearch API on sample data or your own JSON file.",
    )
    parser.add_argument("source", nargs="?", type=Path, help="JSON file to search")
    parser.add_argument("query", nargs="?", help="Query to run against SOURCE")
    parser.add_argument("-n", "--max-results", type=int, default=5,
                        help="Results per query (default: 5)")
    parser.add_argument("--explain", action="store_true",
                        help="Show the per-signal scoring breakdown")
    args = parser.parse_args()

    client = NLSearch()

    if args.source:
        if not args.query:
            print("Error: a QUERY is required when SOURCE is given")
            sys.exit(1)
        try:
            data = load_json(args.source)
        except DataLoadError as exc:
            print(f"Error: {exc}")
            sys.exit(1)
        examples = [(str(args.source), data, [args.query])]
    else:
        examples = EXAMPLES

    for title, data, queries in examples:
        print(f"=== {title} ===")
        for query in queries:
            print(f"\nQuery: \"{query}\"")
            results = client.search(data, query, max_results=args.max_results, explain=args.explain)
            print(ResultFormatter.format_compact(results))
            if args.explain:
                for r in results:
                    print(f"    {r.path_string or '(root)'}: {r.explanation}")
        print()


if __name__ == "__main__":
    main()
