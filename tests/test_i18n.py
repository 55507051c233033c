from types import SimpleNamespace

from app.core.i18n import (
    is_rtl, localized_description, localized_title, normalize_locale, pick_translation, resolve_localized,
    slugify, t,
)


def test_resolve_localized_prefers_requested_locale():
    row = {"title_tr": "Yaz Kampanyası", "title_en": "Summer Deal"}
    assert resolve_localized(row, "title", "en") == "Summer Deal"


def test_resolve_localized_falls_back_to_turkish():
    row = SimpleNamespace(title_tr="Yaz Kampanyası", title_ru=None, title_ar="")
    assert resolve_localized(row, "title", "ru") == "Yaz Kampanyası"
    assert resolve_localized(row, "title", "ar") == "Yaz Kampanyası"


def test_resolve_localized_missing_everywhere_is_empty():
    assert resolve_localized({"title_en": None}, "title", "en") == ""
    assert resolve_localized(None, "title", "en") == ""


def test_joined_translation_fallbacks():
    trs = [{"locale": "tr", "title": "Tekne", "description": ""}, {"locale": "en", "title": "", "description": "Boat"}]
    assert pick_translation(trs, "ru") is None
    assert localized_title("Boat Base", pick_translation(trs, "tr")) == "Tekne"
    assert localized_title("Boat Base", pick_translation(trs, "en")) == "Boat Base"
    assert localized_description("Base text", pick_translation(trs, "tr")) == "Base text"
    assert localized_description("Base text", pick_translation(trs, "en")) == "Boat"
    assert localized_title("Boat Base", None) == "Boat Base"


def test_normalize_locale():
    assert normalize_locale("EN") == "en"
    assert normalize_locale(" ar ") == "ar"
    assert normalize_locale("de") == "tr"
    assert normalize_locale(None) == "tr"


def test_only_arabic_is_rtl():
    assert is_rtl("ar")
    assert not any(is_rtl(l) for l in ("tr", "en", "ru"))


def test_slugify_turkish():
    assert slugify("Araç Kiralama") == "arac-kiralama"
    assert slugify("Işıklı Villa, Kaş!") == "isikli-villa-kas"
    assert slugify("  --Mercedes Vito--  ") == "mercedes-vito"


def test_slugify_non_latin_gives_empty():
    assert slugify("Аренда яхт") == ""
    assert slugify("") == ""
    assert slugify(None) == ""


def test_message_lookup_falls_back():
    assert t("en", "nav.blog") == "Blog"
    assert t("xx", "auth.login") == t("tr", "auth.login")
    assert t("en", "no.such.key") == "no.such.key"
