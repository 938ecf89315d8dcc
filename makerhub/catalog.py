"""
makerhub.catalog — Read-only Reference Catalogs
================================================

Courses, products, rank tiers, badge definitions and blog posts.  The
session store only ever reads from these; point values and prices come
from here and nowhere else.

``DEFAULT_CATALOG`` ships the reference data.  ``load_catalog`` reads a
YAML file in the same shape and falls back to the defaults for any
section the file leaves out::

    ranks:
      - {key: explorer, name: Explorer, threshold: 0}
      - {key: tinkerer, name: Tinkerer, threshold: 100}
    products:
      - {id: p1, name: ESP8266 NodeMCU, price: 239, tag: Wi-Fi MCU}
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Catalog entries
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class Course:
    id: str
    title: str
    level: str
    points: int
    lessons: int
    blurb: str = ""


@dataclass(frozen=True, slots=True)
class Product:
    id: str
    name: str
    price: int
    tag: str = ""


@dataclass(frozen=True, slots=True)
class RankTier:
    """A named level unlocked once the learner holds ``threshold`` points."""

    key: str
    name: str
    threshold: int


@dataclass(frozen=True, slots=True)
class BadgeDefinition:
    key: str
    label: str
    hint: str


@dataclass(frozen=True, slots=True)
class BlogPost:
    id: str
    title: str
    date: str
    read_minutes: int


@dataclass(frozen=True, slots=True)
class Catalog:
    """All reference data, in display order."""

    courses: tuple[Course, ...]
    products: tuple[Product, ...]
    ranks: tuple[RankTier, ...]
    badges: tuple[BadgeDefinition, ...]
    blog: tuple[BlogPost, ...] = ()

    def course(self, course_id: str) -> Course | None:
        return next((c for c in self.courses if c.id == course_id), None)

    def product(self, product_id: str) -> Product | None:
        return next((p for p in self.products if p.id == product_id), None)

    def badge(self, key: str) -> BadgeDefinition | None:
        return next((b for b in self.badges if b.key == key), None)


# ---------------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------------
DEFAULT_COURSES: tuple[Course, ...] = (
    Course(
        "c1", "Arduino Basics", "Beginner", 80, 8,
        "Learn microcontroller fundamentals and build your first LED + sensor project.",
    ),
    Course(
        "c2", "Robotics 101", "Beginner", 120, 10,
        "Intro to motors, drivers, and motion control. Build a line-following bot.",
    ),
    Course(
        "c3", "Web for Makers", "Intermediate", 150, 12,
        "Ship a fast portfolio and IoT dashboard with modern web tools.",
    ),
    Course(
        "c4", "AI for Students", "Intermediate", 180, 9,
        "Use LLMs responsibly for study, notes, Q&A and project ideation.",
    ),
)

DEFAULT_PRODUCTS: tuple[Product, ...] = (
    Product("p1", "ESP8266 NodeMCU", 239, "Wi-Fi MCU"),
    Product("p2", "HC-SR04 Sensor", 89, "Distance"),
    Product("p3", "L298N Motor Driver", 179, "Motors"),
    Product("p4", "Breadboard + Wires Kit", 149, "Starter"),
    Product("p5", "DHT11 Sensor", 79, "Temp/Humidity"),
    Product("p6", "SG90 Micro Servo", 129, "Servo"),
)

DEFAULT_RANKS: tuple[RankTier, ...] = (
    RankTier("explorer", "Explorer", 0),
    RankTier("tinkerer", "Tinkerer", 100),
    RankTier("builder", "Builder", 300),
    RankTier("innovator", "Innovator", 700),
    RankTier("visionary", "Visionary", 1200),
)

DEFAULT_BADGES: tuple[BadgeDefinition, ...] = (
    BadgeDefinition("firstCourse", "First Course", "Complete your first course"),
    BadgeDefinition("quizWhiz", "Quiz Whiz", "Ace a quiz"),
    BadgeDefinition("helper", "Helper", "Post in the forum"),
    BadgeDefinition("contributor", "Contributor", "Share a project idea"),
    BadgeDefinition("shopper", "Shopper", "Add something to cart"),
)

DEFAULT_BLOG: tuple[BlogPost, ...] = (
    BlogPost("b1", "Choosing Your First Microcontroller", "2025-08-20", 5),
    BlogPost("b2", "What is an H-Bridge?", "2025-08-11", 4),
    BlogPost("b3", "Study Smarter with AI (Safely)", "2025-07-30", 6),
)

DEFAULT_CATALOG = Catalog(
    courses=DEFAULT_COURSES,
    products=DEFAULT_PRODUCTS,
    ranks=DEFAULT_RANKS,
    badges=DEFAULT_BADGES,
    blog=DEFAULT_BLOG,
)


# ---------------------------------------------------------------------------
# YAML loading
# ---------------------------------------------------------------------------
def _parse_courses(rows: list[dict]) -> tuple[Course, ...]:
    return tuple(
        Course(
            id=str(r["id"]),
            title=str(r["title"]),
            level=str(r.get("level", "")),
            points=int(r["points"]),
            lessons=int(r.get("lessons", 0)),
            blurb=str(r.get("blurb", "")),
        )
        for r in rows
    )


def _parse_products(rows: list[dict]) -> tuple[Product, ...]:
    return tuple(
        Product(
            id=str(r["id"]),
            name=str(r["name"]),
            price=int(r["price"]),
            tag=str(r.get("tag", "")),
        )
        for r in rows
    )


def _parse_ranks(rows: list[dict]) -> tuple[RankTier, ...]:
    return tuple(
        RankTier(key=str(r["key"]), name=str(r["name"]), threshold=int(r["threshold"]))
        for r in rows
    )


def _parse_badges(rows: list[dict]) -> tuple[BadgeDefinition, ...]:
    return tuple(
        BadgeDefinition(key=str(r["key"]), label=str(r["label"]), hint=str(r.get("hint", "")))
        for r in rows
    )


def _parse_blog(rows: list[dict]) -> tuple[BlogPost, ...]:
    return tuple(
        BlogPost(
            id=str(r["id"]),
            title=str(r["title"]),
            date=str(r.get("date", "")),
            read_minutes=int(r.get("read_minutes", 0)),
        )
        for r in rows
    )


def load_catalog(path: str | Path) -> Catalog:
    """Read a YAML catalog from *path*.

    Sections missing from the file keep the built-in defaults.

    Raises
    ------
    FileNotFoundError
        If the YAML file doesn't exist.
    KeyError
        If an entry lacks a required field.
    ValueError
        If the file defines an empty ``ranks`` list.
    """
    catalog_path = Path(path)
    if not catalog_path.exists():
        raise FileNotFoundError(
            f"Catalog file not found: {catalog_path.resolve()}\n"
            "Hint: remove catalog_path from config.yaml to use the built-in catalog."
        )

    with open(catalog_path, encoding="utf-8") as fh:
        raw: dict = yaml.safe_load(fh) or {}

    ranks = _parse_ranks(raw["ranks"]) if "ranks" in raw else DEFAULT_RANKS
    if not ranks:
        raise ValueError(f"Catalog {catalog_path} must define at least one rank tier.")

    catalog = Catalog(
        courses=_parse_courses(raw["courses"]) if "courses" in raw else DEFAULT_COURSES,
        products=_parse_products(raw["products"]) if "products" in raw else DEFAULT_PRODUCTS,
        ranks=ranks,
        badges=_parse_badges(raw["badges"]) if "badges" in raw else DEFAULT_BADGES,
        blog=_parse_blog(raw["blog"]) if "blog" in raw else DEFAULT_BLOG,
    )
    logger.info(
        "Catalog loaded from %s: %d courses, %d products, %d ranks, %d badges",
        catalog_path,
        len(catalog.courses),
        len(catalog.products),
        len(catalog.ranks),
        len(catalog.badges),
    )
    return catalog


# ---------------------------------------------------------------------------
# Price display
# ---------------------------------------------------------------------------
CURRENCY_SYMBOL = "₹"


def format_price(amount: int) -> str:
    """Rupee amount with Indian digit grouping, e.g. ``₹1,23,456``.

    The last three digits form one group, every two digits before them
    another.
    """
    sign = "-" if amount < 0 else ""
    digits = str(abs(amount))
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups: list[str] = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        groups.insert(0, head)
        digits = ",".join([*groups, tail])
    return f"{CURRENCY_SYMBOL}{sign}{digits}"
