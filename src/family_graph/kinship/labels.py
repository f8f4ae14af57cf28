"""Localized labels for kinship categories.

Labels are looked up by ``(category, gender of the target person)``:
male and female pick the gendered word, unspecified gender picks a
combined form such as "brother/sister". The ``unknown`` category renders
as an empty string so the caller shows nothing rather than a placeholder.
"""
from __future__ import annotations

from typing import NamedTuple

from ..models import Gender
from .categories import KinshipCategory


class GenderedLabel(NamedTuple):
    male: str
    female: str
    unspecified: str

    def pick(self, gender: Gender) -> str:
        if gender == Gender.MALE:
            return self.male
        if gender == Gender.FEMALE:
            return self.female
        return self.unspecified


def _same(label: str) -> GenderedLabel:
    return GenderedLabel(label, label, label)


C = KinshipCategory

ENGLISH: dict[KinshipCategory, GenderedLabel] = {
    C.SELF: _same("you"),
    C.SPOUSE: GenderedLabel("husband", "wife", "husband/wife"),

    C.PARENT: GenderedLabel("father", "mother", "father/mother"),
    C.GRANDPARENT: GenderedLabel("grandfather", "grandmother", "grandfather/grandmother"),
    C.GREAT_GRANDPARENT: GenderedLabel(
        "great-grandfather", "great-grandmother", "great-grandfather/grandmother"
    ),
    C.GREAT_GREAT_GRANDPARENT: GenderedLabel(
        "great-great-grandfather", "great-great-grandmother", "great-great-grandfather/grandmother"
    ),
    C.ANCESTOR: _same("ancestor"),
    C.CHILD: GenderedLabel("son", "daughter", "son/daughter"),
    C.GRANDCHILD: GenderedLabel("grandson", "granddaughter", "grandson/granddaughter"),
    C.GREAT_GRANDCHILD: GenderedLabel(
        "great-grandson", "great-granddaughter", "great-grandson/granddaughter"
    ),
    C.GREAT_GREAT_GRANDCHILD: GenderedLabel(
        "great-great-grandson", "great-great-granddaughter", "great-great-grandson/granddaughter"
    ),
    C.DESCENDANT: _same("descendant"),

    C.SIBLING: GenderedLabel("brother", "sister", "brother/sister"),
    C.UNCLE_AUNT: GenderedLabel("uncle", "aunt", "uncle/aunt"),
    C.GREAT_UNCLE_AUNT: GenderedLabel("great-uncle", "great-aunt", "great-uncle/aunt"),
    C.GREAT_GREAT_UNCLE_AUNT: GenderedLabel(
        "great-great-uncle", "great-great-aunt", "great-great-uncle/aunt"
    ),
    C.NEPHEW_NIECE: GenderedLabel("nephew", "niece", "nephew/niece"),
    C.GRAND_NEPHEW_NIECE: GenderedLabel("grand-nephew", "grand-niece", "grand-nephew/niece"),
    C.GREAT_GRAND_NEPHEW_NIECE: GenderedLabel(
        "great-grand-nephew", "great-grand-niece", "great-grand-nephew/niece"
    ),
    C.COUSIN: _same("first cousin"),
    C.SECOND_COUSIN: _same("second cousin"),
    C.THIRD_COUSIN: _same("third cousin"),
    C.DISTANT_COUSIN: _same("distant cousin"),
    C.DISTANT_RELATIVE: _same("distant relative"),

    C.PARENT_IN_LAW: GenderedLabel("father-in-law", "mother-in-law", "father/mother-in-law"),
    C.GRANDPARENT_IN_LAW: GenderedLabel(
        "spouse's grandfather", "spouse's grandmother", "spouse's grandfather/grandmother"
    ),
    C.SIBLING_IN_LAW: GenderedLabel("brother-in-law", "sister-in-law", "brother/sister-in-law"),
    C.STEP_CHILD: GenderedLabel("stepson", "stepdaughter", "stepson/stepdaughter"),
    C.SPOUSE_UNCLE_AUNT: GenderedLabel("spouse's uncle", "spouse's aunt", "spouse's uncle/aunt"),
    C.SPOUSE_NEPHEW_NIECE: GenderedLabel(
        "spouse's nephew", "spouse's niece", "spouse's nephew/niece"
    ),
    C.SPOUSE_COUSIN: _same("spouse's cousin"),
    C.SPOUSE_GRANDCHILD: GenderedLabel(
        "spouse's grandson", "spouse's granddaughter", "spouse's grandson/granddaughter"
    ),
    C.SPOUSE_RELATIVE: _same("relative of spouse"),

    C.CHILD_SPOUSE: GenderedLabel("son-in-law", "daughter-in-law", "son/daughter-in-law"),
    C.SIBLING_SPOUSE: GenderedLabel(
        "brother-in-law (sister's husband)",
        "sister-in-law (brother's wife)",
        "sibling's spouse",
    ),
    C.GRANDCHILD_SPOUSE: GenderedLabel(
        "granddaughter's husband", "grandson's wife", "grandchild's spouse"
    ),
    C.NEPHEW_NIECE_SPOUSE: GenderedLabel("niece's husband", "nephew's wife", "nephew/niece's spouse"),
    C.UNCLE_AUNT_SPOUSE: GenderedLabel("aunt's husband", "uncle's wife", "uncle/aunt's spouse"),
    C.COUSIN_SPOUSE: GenderedLabel("cousin's husband", "cousin's wife", "cousin's spouse"),
    C.PARENT_SPOUSE: GenderedLabel("stepfather", "stepmother", "stepfather/stepmother"),
    C.SPOUSE_OF_RELATIVE: GenderedLabel(
        "husband of relative", "wife of relative", "spouse of relative"
    ),
}

RUSSIAN: dict[KinshipCategory, GenderedLabel] = {
    C.SELF: _same("Это вы"),
    C.SPOUSE: GenderedLabel("Муж", "Жена", "Супруг(а)"),

    C.PARENT: GenderedLabel("Отец", "Мать", "Родитель"),
    C.GRANDPARENT: GenderedLabel("Дедушка", "Бабушка", "Дедушка/Бабушка"),
    C.GREAT_GRANDPARENT: GenderedLabel("Прадедушка", "Прабабушка", "Прадед/Прабабушка"),
    C.GREAT_GREAT_GRANDPARENT: GenderedLabel(
        "Прапрадедушка", "Прапрабабушка", "Прапрадед/Прапрабабушка"
    ),
    C.ANCESTOR: _same("Предок"),
    C.CHILD: GenderedLabel("Сын", "Дочь", "Ребёнок"),
    C.GRANDCHILD: GenderedLabel("Внук", "Внучка", "Внук/Внучка"),
    C.GREAT_GRANDCHILD: GenderedLabel("Правнук", "Правнучка", "Правнук/Правнучка"),
    C.GREAT_GREAT_GRANDCHILD: GenderedLabel(
        "Праправнук", "Праправнучка", "Праправнук/Праправнучка"
    ),
    C.DESCENDANT: _same("Потомок"),

    C.SIBLING: GenderedLabel("Брат", "Сестра", "Брат/Сестра"),
    C.UNCLE_AUNT: GenderedLabel("Дядя", "Тётя", "Дядя/Тётя"),
    C.GREAT_UNCLE_AUNT: GenderedLabel("Двоюродный дедушка", "Двоюродная бабушка", "Двоюр. дед/бабушка"),
    C.GREAT_GREAT_UNCLE_AUNT: GenderedLabel(
        "Двоюродный прадедушка", "Двоюродная прабабушка", "Двоюр. прадед"
    ),
    C.NEPHEW_NIECE: GenderedLabel("Племянник", "Племянница", "Племянник/Племянница"),
    C.GRAND_NEPHEW_NIECE: GenderedLabel(
        "Внучатый племянник", "Внучатая племянница", "Внучатый племянник"
    ),
    C.GREAT_GRAND_NEPHEW_NIECE: GenderedLabel(
        "Правнучатый племянник", "Правнучатая племянница", "Правнучатый племянник"
    ),
    C.COUSIN: GenderedLabel("Двоюродный брат", "Двоюродная сестра", "Двоюродный брат/сестра"),
    C.SECOND_COUSIN: GenderedLabel("Троюродный брат", "Троюродная сестра", "Троюродный брат/сестра"),
    C.THIRD_COUSIN: GenderedLabel(
        "Четвероюродный брат", "Четвероюродная сестра", "Четвероюр. брат/сестра"
    ),
    C.DISTANT_COUSIN: _same("Дальний кузен"),
    C.COUSIN_REMOVED: _same("Дальний кузен"),
    C.DISTANT_RELATIVE: _same("Дальний родственник"),

    C.PARENT_IN_LAW: GenderedLabel("Свёкор/Тесть", "Свекровь/Тёща", "Родитель супруга"),
    C.GRANDPARENT_IN_LAW: GenderedLabel("Дедушка супруга", "Бабушка супруга", "Дед/бабушка супруга"),
    C.SIBLING_IN_LAW: GenderedLabel("Деверь/Шурин", "Золовка/Свояченица", "Брат/сестра супруга"),
    C.STEP_CHILD: GenderedLabel("Пасынок", "Падчерица", "Пасынок/Падчерица"),
    C.SPOUSE_UNCLE_AUNT: GenderedLabel("Дядя супруга", "Тётя супруга", "Дядя/тётя супруга"),
    C.SPOUSE_NEPHEW_NIECE: GenderedLabel(
        "Племянник супруга", "Племянница супруга", "Племянник супруга"
    ),
    C.SPOUSE_COUSIN: GenderedLabel(
        "Двоюр. брат супруга", "Двоюр. сестра супруга", "Двоюр. брат/сестра супруга"
    ),
    C.SPOUSE_GRANDCHILD: GenderedLabel("Внук супруга", "Внучка супруга", "Внук/внучка супруга"),
    C.SPOUSE_RELATIVE: _same("Родственник супруга"),

    C.CHILD_SPOUSE: GenderedLabel("Зять", "Невестка", "Зять/Невестка"),
    C.SIBLING_SPOUSE: GenderedLabel(
        "Зять (муж сестры)", "Невестка (жена брата)", "Супруг брата/сестры"
    ),
    C.GRANDCHILD_SPOUSE: GenderedLabel("Муж внучки", "Жена внука", "Супруг внука/внучки"),
    C.NEPHEW_NIECE_SPOUSE: GenderedLabel("Муж племянницы", "Жена племянника", "Супруг племянника"),
    C.UNCLE_AUNT_SPOUSE: GenderedLabel("Муж тёти", "Жена дяди", "Супруг дяди/тёти"),
    C.COUSIN_SPOUSE: GenderedLabel(
        "Муж двоюр. сестры", "Жена двоюр. брата", "Супруг двоюр. брата/сестры"
    ),
    C.PARENT_SPOUSE: GenderedLabel("Отчим", "Мачеха", "Отчим/Мачеха"),
    C.SPOUSE_OF_RELATIVE: GenderedLabel(
        "Муж родственника", "Жена родственника", "Супруг родственника"
    ),
}

LABELS: dict[str, dict[KinshipCategory, GenderedLabel]] = {
    "en": ENGLISH,
    "ru": RUSSIAN,
}

FALLBACK_LABELS: dict[str, str] = {
    "en": "relative",
    "ru": "Родственник",
}

# Russian has no "N times removed"; the common removed cousins have their
# own words, keyed by (cousin degree, removal, named person is the elder)
RUSSIAN_REMOVED_COUSINS: dict[tuple[int, int, bool], GenderedLabel] = {
    (1, 1, True): GenderedLabel("Двоюродный дядя", "Двоюродная тётя", "Двоюродный дядя/тётя"),
    (1, 1, False): GenderedLabel("Двоюродный племянник", "Двоюродная племянница", "Двоюр. племянник"),
    (1, 2, True): GenderedLabel("Двоюродный дед", "Двоюродная бабушка", "Двоюродный дед/бабушка"),
    (1, 2, False): GenderedLabel("Внук двоюр. брата", "Внучка двоюр. брата", "Внук двоюр. брата/сестры"),
    (2, 1, True): GenderedLabel("Троюродный дядя", "Троюродная тётя", "Троюродный дядя/тётя"),
    (2, 1, False): GenderedLabel("Троюродный племянник", "Троюродная племянница", "Троюр. племянник"),
}

_ORDINALS = {1: "first", 2: "second", 3: "third", 4: "fourth", 5: "fifth", 6: "sixth"}
_TIMES = {1: "once", 2: "twice", 3: "thrice"}


def _ordinal(n: int) -> str:
    return _ORDINALS.get(n, f"{n}th")


def cousin_removed_label(cousin_degree: int, removal: int) -> str:
    """English label such as "second cousin twice removed"."""
    base = f"{_ordinal(cousin_degree)} cousin"
    if removal <= 0:
        return base
    return f"{base} {_TIMES.get(removal, f'{removal} times')} removed"


def supported_locales() -> list[str]:
    return sorted(LABELS)


def render_label(
    category: KinshipCategory,
    gender: Gender = Gender.UNSPECIFIED,
    *,
    locale: str = "en",
    cousin_degree: int | None = None,
    removal: int | None = None,
    elder: bool = False,
) -> str:
    """Render the label for ``category`` describing a person of ``gender``.

    ``elder`` marks a removed cousin who sits in an older generation than
    the person the label is read from (a parent's cousin rather than a
    cousin's child). Unsupported locales fall back to English.
    """
    if category == KinshipCategory.UNKNOWN:
        return ""

    table = LABELS.get(locale, ENGLISH)

    if category == KinshipCategory.COUSIN_REMOVED and cousin_degree is not None and removal is not None:
        if table is ENGLISH:
            return cousin_removed_label(cousin_degree, removal)
        if table is RUSSIAN:
            named = RUSSIAN_REMOVED_COUSINS.get((cousin_degree, removal, elder))
            if named is not None:
                return named.pick(gender)
    if category == KinshipCategory.COUSIN_REMOVED and table is ENGLISH:
        return ENGLISH[KinshipCategory.DISTANT_COUSIN].pick(gender)

    label = table.get(category)
    if label is None:
        return FALLBACK_LABELS.get(locale, FALLBACK_LABELS["en"])
    return label.pick(gender)
