"""
tests/test_config.py — Config & Catalog Loader Tests
=====================================================
"""

from __future__ import annotations

import pytest

from makerhub.catalog import DEFAULT_CATALOG, DEFAULT_PRODUCTS, format_price, load_catalog
from makerhub.config import MakerHubConfig, load_config


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        cfg = load_config(tmp_path / "nope.yaml")
        assert cfg == MakerHubConfig()
        assert cfg.storage_key == "makerhub_state"
        assert cfg.default_view == "home"

    def test_reads_values(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "storage_key: demo\ncatalog_path: cat.yaml\ndefault_view: learn\n",
            encoding="utf-8",
        )
        cfg = load_config(path)
        assert cfg.storage_key == "demo"
        assert cfg.catalog_path == "cat.yaml"
        assert cfg.default_view == "learn"

    def test_env_var_selects_file(self, tmp_path, monkeypatch):
        path = tmp_path / "other.yaml"
        path.write_text("storage_key: from_env\n", encoding="utf-8")
        monkeypatch.setenv("MAKERHUB_CONFIG", str(path))
        assert load_config().storage_key == "from_env"

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == MakerHubConfig()

    def test_unknown_view_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("default_view: dungeon\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(path)


class TestDefaultCatalog:
    def test_reference_data(self):
        assert [c.points for c in DEFAULT_CATALOG.courses] == [80, 120, 150, 180]
        assert [r.threshold for r in DEFAULT_CATALOG.ranks] == [0, 100, 300, 700, 1200]
        assert [b.key for b in DEFAULT_CATALOG.badges] == [
            "firstCourse", "quizWhiz", "helper", "contributor", "shopper",
        ]
        assert len(DEFAULT_CATALOG.blog) == 3

    def test_lookups(self):
        assert DEFAULT_CATALOG.product("p2").price == 89
        assert DEFAULT_CATALOG.course("c4").title == "AI for Students"
        assert DEFAULT_CATALOG.badge("helper").label == "Helper"
        assert DEFAULT_CATALOG.product("zzz") is None
        assert DEFAULT_CATALOG.course("zzz") is None


class TestLoadCatalog:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_catalog(tmp_path / "missing.yaml")

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text(
            "ranks:\n"
            "  - {key: rookie, name: Rookie, threshold: 0}\n"
            "  - {key: pro, name: Pro, threshold: 50}\n",
            encoding="utf-8",
        )
        catalog = load_catalog(path)
        assert [r.key for r in catalog.ranks] == ["rookie", "pro"]
        assert catalog.products == DEFAULT_PRODUCTS

    def test_products_and_courses(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text(
            "products:\n"
            "  - {id: k1, name: Kit, price: 999}\n"
            "courses:\n"
            "  - {id: z1, title: Soldering, points: 40}\n",
            encoding="utf-8",
        )
        catalog = load_catalog(path)
        assert catalog.product("k1").price == 999
        assert catalog.product("k1").tag == ""
        assert catalog.course("z1").points == 40

    def test_empty_ranks_rejected(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text("ranks: []\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_catalog(path)

    def test_missing_required_field(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text("products:\n  - {id: k1, name: Kit}\n", encoding="utf-8")
        with pytest.raises(KeyError):
            load_catalog(path)


class TestFormatPrice:
    @pytest.mark.parametrize(
        ("amount", "text"),
        [
            (0, "₹0"),
            (89, "₹89"),
            (567, "₹567"),
            (1234, "₹1,234"),
            (12345, "₹12,345"),
            (123456, "₹1,23,456"),
            (12345678, "₹1,23,45,678"),
        ],
    )
    def test_indian_grouping(self, amount, text):
        assert format_price(amount) == text

    def test_negative_amount(self):
        assert format_price(-1500) == "₹-1,500"
