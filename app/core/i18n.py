"""Locale handling shared by the API and the rendered pages.

Two translation layouts exist in the datastore:

* locale-flat-column entities (campaigns, blog posts, pages, FAQs) carry one
  column per language, e.g. ``title_tr``, ``title_en``; Turkish is the fallback.
* joined-table entities (services, listings, car segments) keep translations in
  an ``*_i18n`` table and fall back to the base row's ``name``/``description``.
"""
import re
import unicodedata
from typing import Any, Iterable, Optional

LOCALES = ("tr", "en", "ru", "ar")
DEFAULT_LOCALE = "tr"
RTL_LOCALES = ("ar",)


def normalize_locale(value: Optional[str]) -> str:
    v = (value or "").strip().lower()
    return v if v in LOCALES else DEFAULT_LOCALE


def is_rtl(locale: str) -> bool:
    return locale in RTL_LOCALES


def _get(entity: Any, name: str) -> Any:
    if isinstance(entity, dict):
        return entity.get(name)
    return getattr(entity, name, None)


def resolve_localized(entity: Any, field: str, locale: str, fallback: str = DEFAULT_LOCALE) -> str:
    """Return ``{field}_{locale}`` when non-empty, else ``{field}_{fallback}``, else ``""``."""
    if entity is None:
        return ""
    value = _get(entity, f"{field}_{locale}")
    if value not in (None, ""):
        return value
    value = _get(entity, f"{field}_{fallback}")
    return value if value not in (None, "") else ""


def pick_translation(translations: Optional[Iterable[Any]], locale: str) -> Any:
    for tr in translations or ():
        if _get(tr, "locale") == locale:
            return tr
    return None


def localized_title(base_name: Optional[str], translation: Any) -> str:
    title = _get(translation, "title") if translation is not None else None
    return title or base_name or ""


def localized_description(base_description: Optional[str], translation: Any) -> str:
    desc = _get(translation, "description") if translation is not None else None
    return desc or base_description or ""


def slugify(value: Optional[str], max_length: int = 90) -> str:
    """Strip diacritics and collapse non-alphanumerics to ``-``.

    Returns ``""`` for scripts with no latin transliteration (ru, ar); callers
    supply their own fallback.
    """
    if not value:
        return ""
    normalized = unicodedata.normalize("NFD", str(value))
    stripped = "".join(c for c in normalized if unicodedata.category(c) != "Mn")
    # dotless i survives NFD
    stripped = stripped.replace("ı", "i").replace("İ", "i")
    base = re.sub(r"[^a-z0-9]+", "-", stripped.lower()).strip("-")
    return base[:max_length]


MESSAGES = {
    "tr": {
        "nav.home": "Ana Sayfa",
        "nav.faq": "SSS",
        "nav.campaigns": "Kampanyalar",
        "nav.blog": "Blog",
        "nav.profile": "Profilim",
        "nav.login": "Giriş Yap",
        "nav.logout": "Çıkış Yap",
        "services.title": "Hizmetlerimiz",
        "services.empty": "Bu hizmet için henüz ilan bulunmuyor.",
        "listing.per_day": "günlük",
        "listing.per_week": "haftalık",
        "listing.features": "Özellikler",
        "listing.availability": "Müsaitlik",
        "listing.unavailable": "Dolu",
        "reservation.title": "Rezervasyon Yap",
        "reservation.name": "Ad Soyad",
        "reservation.email": "E-posta",
        "reservation.phone": "Telefon",
        "reservation.start": "Başlangıç",
        "reservation.end": "Bitiş",
        "reservation.guests": "Kişi sayısı",
        "reservation.notes": "Özel istekler",
        "reservation.submit": "Rezervasyon Talebi Gönder",
        "reservation.success": "Rezervasyon talebiniz alındı. En kısa sürede sizinle iletişime geçeceğiz.",
        "reservation.conflict": "Seçilen tarihler için zaten rezervasyon mevcut",
        "reservation.whatsapp": "WhatsApp ile sor",
        "blog.title": "Blog",
        "blog.empty": "Henüz blog yazısı yok",
        "faq.title": "Sıkça Sorulan Sorular",
        "campaigns.title": "Kampanyalar",
        "campaigns.empty": "Şu anda aktif kampanya yok",
        "campaigns.valid_until": "tarihine kadar geçerli",
        "auth.login": "Giriş Yap",
        "auth.signup": "Kayıt Ol",
        "auth.email": "E-posta",
        "auth.password": "Şifre",
        "auth.full_name": "Ad Soyad",
        "auth.phone": "Telefon",
        "auth.error": "Geçersiz e-posta veya şifre",
        "profile.title": "Profilim",
        "profile.reservations": "Rezervasyonlarım",
        "profile.empty": "Henüz rezervasyonunuz yok",
        "status.pending": "Beklemede",
        "status.confirmed": "Onaylandı",
        "status.cancelled": "İptal edildi",
        "status.completed": "Tamamlandı",
        "segment.all": "Tümü",
    },
    "en": {
        "nav.home": "Home",
        "nav.faq": "FAQ",
        "nav.campaigns": "Campaigns",
        "nav.blog": "Blog",
        "nav.profile": "My Profile",
        "nav.login": "Sign In",
        "nav.logout": "Sign Out",
        "services.title": "Our Services",
        "services.empty": "There are no listings for this service yet.",
        "listing.per_day": "per day",
        "listing.per_week": "per week",
        "listing.features": "Features",
        "listing.availability": "Availability",
        "listing.unavailable": "Booked",
        "reservation.title": "Make a Reservation",
        "reservation.name": "Full name",
        "reservation.email": "Email",
        "reservation.phone": "Phone",
        "reservation.start": "Start date",
        "reservation.end": "End date",
        "reservation.guests": "Guests",
        "reservation.notes": "Special requests",
        "reservation.submit": "Send Reservation Request",
        "reservation.success": "Your reservation request has been received. We will contact you shortly.",
        "reservation.conflict": "The selected dates are already reserved",
        "reservation.whatsapp": "Ask on WhatsApp",
        "blog.title": "Blog",
        "blog.empty": "No blog posts yet",
        "faq.title": "Frequently Asked Questions",
        "campaigns.title": "Campaigns",
        "campaigns.empty": "There are no active campaigns",
        "campaigns.valid_until": "valid until",
        "auth.login": "Sign In",
        "auth.signup": "Sign Up",
        "auth.email": "Email",
        "auth.password": "Password",
        "auth.full_name": "Full name",
        "auth.phone": "Phone",
        "auth.error": "Invalid email or password",
        "profile.title": "My Profile",
        "profile.reservations": "My Reservations",
        "profile.empty": "You have no reservations yet",
        "status.pending": "Pending",
        "status.confirmed": "Confirmed",
        "status.cancelled": "Cancelled",
        "status.completed": "Completed",
        "segment.all": "All",
    },
    "ru": {
        "nav.home": "Главная",
        "nav.faq": "Вопросы",
        "nav.campaigns": "Акции",
        "nav.blog": "Блог",
        "nav.profile": "Профиль",
        "nav.login": "Войти",
        "nav.logout": "Выйти",
        "services.title": "Наши услуги",
        "services.empty": "Для этой услуги пока нет предложений.",
        "listing.per_day": "в день",
        "listing.per_week": "в неделю",
        "listing.features": "Особенности",
        "listing.availability": "Доступность",
        "listing.unavailable": "Занято",
        "reservation.title": "Забронировать",
        "reservation.name": "Имя и фамилия",
        "reservation.email": "Эл. почта",
        "reservation.phone": "Телефон",
        "reservation.start": "Дата начала",
        "reservation.end": "Дата окончания",
        "reservation.guests": "Гости",
        "reservation.notes": "Особые пожелания",
        "reservation.submit": "Отправить заявку",
        "reservation.success": "Ваша заявка получена. Мы скоро свяжемся с вами.",
        "reservation.conflict": "Выбранные даты уже забронированы",
        "reservation.whatsapp": "Спросить в WhatsApp",
        "blog.title": "Блог",
        "blog.empty": "Пока нет записей",
        "faq.title": "Часто задаваемые вопросы",
        "campaigns.title": "Акции",
        "campaigns.empty": "Сейчас нет активных акций",
        "campaigns.valid_until": "действует до",
        "auth.login": "Войти",
        "auth.signup": "Регистрация",
        "auth.email": "Эл. почта",
        "auth.password": "Пароль",
        "auth.full_name": "Имя и фамилия",
        "auth.phone": "Телефон",
        "auth.error": "Неверный email или пароль",
        "profile.title": "Профиль",
        "profile.reservations": "Мои бронирования",
        "profile.empty": "У вас пока нет бронирований",
        "status.pending": "Ожидает",
        "status.confirmed": "Подтверждено",
        "status.cancelled": "Отменено",
        "status.completed": "Завершено",
        "segment.all": "Все",
    },
    "ar": {
        "nav.home": "الرئيسية",
        "nav.faq": "الأسئلة الشائعة",
        "nav.campaigns": "العروض",
        "nav.blog": "المدونة",
        "nav.profile": "ملفي",
        "nav.login": "تسجيل الدخول",
        "nav.logout": "تسجيل الخروج",
        "services.title": "خدماتنا",
        "services.empty": "لا توجد عروض لهذه الخدمة بعد.",
        "listing.per_day": "يوميًا",
        "listing.per_week": "أسبوعيًا",
        "listing.features": "المميزات",
        "listing.availability": "التوفر",
        "listing.unavailable": "محجوز",
        "reservation.title": "احجز الآن",
        "reservation.name": "الاسم الكامل",
        "reservation.email": "البريد الإلكتروني",
        "reservation.phone": "الهاتف",
        "reservation.start": "تاريخ البدء",
        "reservation.end": "تاريخ الانتهاء",
        "reservation.guests": "عدد الضيوف",
        "reservation.notes": "طلبات خاصة",
        "reservation.submit": "إرسال طلب الحجز",
        "reservation.success": "تم استلام طلب الحجز. سنتواصل معك قريبًا.",
        "reservation.conflict": "التواريخ المحددة محجوزة بالفعل",
        "reservation.whatsapp": "اسأل عبر واتساب",
        "blog.title": "المدونة",
        "blog.empty": "لا توجد مقالات بعد",
        "faq.title": "الأسئلة الشائعة",
        "campaigns.title": "العروض",
        "campaigns.empty": "لا توجد عروض نشطة حاليًا",
        "campaigns.valid_until": "صالح حتى",
        "auth.login": "تسجيل الدخول",
        "auth.signup": "إنشاء حساب",
        "auth.email": "البريد الإلكتروني",
        "auth.password": "كلمة المرور",
        "auth.full_name": "الاسم الكامل",
        "auth.phone": "الهاتف",
        "auth.error": "البريد الإلكتروني أو كلمة المرور غير صحيحة",
        "profile.title": "ملفي",
        "profile.reservations": "حجوزاتي",
        "profile.empty": "لا توجد لديك حجوزات بعد",
        "status.pending": "قيد الانتظار",
        "status.confirmed": "مؤكد",
        "status.cancelled": "ملغى",
        "status.completed": "مكتمل",
        "segment.all": "الكل",
    },
}


def t(locale: str, key: str) -> str:
    msg = MESSAGES.get(locale, {}).get(key)
    if msg:
        return msg
    return MESSAGES[DEFAULT_LOCALE].get(key, key)
