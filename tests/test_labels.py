"""Tests for localized kinship labels."""

import pytest

from family_graph.kinship import KinshipCategory, render_label, supported_locales
from family_graph.kinship import labels
from family_graph.kinship.labels import cousin_removed_label
from family_graph.models import Gender


class TestRenderLabel:
    """Tests for (category, gender) lookup."""

    @pytest.mark.parametrize(
        ("gender", "expected"),
        [
            (Gender.MALE, "brother"),
            (Gender.FEMALE, "sister"),
            (Gender.UNSPECIFIED, "brother/sister"),
        ],
    )
    def test_gendered_forms(self, gender, expected):
        assert render_label(KinshipCategory.SIBLING, gender) == expected

    def test_unknown_category_is_empty(self):
        """No placeholder text for unrelated persons."""
        assert render_label(KinshipCategory.UNKNOWN, Gender.MALE) == ""
        assert render_label(KinshipCategory.UNKNOWN, locale="ru") == ""

    def test_russian(self):
        assert render_label(KinshipCategory.GRANDPARENT, Gender.FEMALE, locale="ru") == "Бабушка"
        assert render_label(KinshipCategory.CHILD, locale="ru") == "Ребёнок"
        assert render_label(KinshipCategory.PARENT_SPOUSE, Gender.MALE, locale="ru") == "Отчим"

    def test_unsupported_locale_falls_back_to_english(self):
        assert render_label(KinshipCategory.PARENT, Gender.MALE, locale="de") == "father"

    def test_missing_category_uses_generic_word(self, monkeypatch):
        monkeypatch.setitem(labels.LABELS, "xx", {})
        assert render_label(KinshipCategory.SIBLING, locale="xx") == "relative"

    def test_every_category_has_labels(self):
        """Both locales name every category except unknown."""
        for locale in supported_locales():
            for category in KinshipCategory:
                if category in (KinshipCategory.UNKNOWN, KinshipCategory.COUSIN_REMOVED):
                    continue
                assert category in labels.LABELS[locale], (locale, category)

    def test_supported_locales(self):
        assert supported_locales() == ["en", "ru"]


class TestCousinRemoved:
    """Tests for the dynamic removed-cousin label."""

    @pytest.mark.parametrize(
        ("degree", "removal", "expected"),
        [
            (1, 1, "first cousin once removed"),
            (2, 2, "second cousin twice removed"),
            (3, 3, "third cousin thrice removed"),
            (1, 4, "first cousin 4 times removed"),
            (8, 0, "8th cousin"),
        ],
    )
    def test_english(self, degree, removal, expected):
        assert cousin_removed_label(degree, removal) == expected

    def test_render_uses_degree_and_removal(self):
        label = render_label(KinshipCategory.COUSIN_REMOVED, cousin_degree=2, removal=1)
        assert label == "second cousin once removed"

    def test_render_without_counts(self):
        assert render_label(KinshipCategory.COUSIN_REMOVED) == "distant cousin"

    @pytest.mark.parametrize(
        ("degree", "removal", "elder", "expected"),
        [
            (1, 1, True, "Двоюродный дядя"),
            (1, 1, False, "Двоюродный племянник"),
            (1, 2, True, "Двоюродный дед"),
            (2, 1, False, "Троюродный племянник"),
        ],
    )
    def test_russian_named_forms(self, degree, removal, elder, expected):
        label = render_label(
            KinshipCategory.COUSIN_REMOVED,
            Gender.MALE,
            locale="ru",
            cousin_degree=degree,
            removal=removal,
            elder=elder,
        )
        assert label == expected

    def test_russian_falls_back_to_distant_cousin(self):
        label = render_label(KinshipCategory.COUSIN_REMOVED, locale="ru", cousin_degree=3, removal=2)
        assert label == "Дальний кузен"
        assert render_label(KinshipCategory.COUSIN_REMOVED, locale="ru") == "Дальний кузен"
