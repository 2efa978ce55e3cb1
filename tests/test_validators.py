"""Tests for validation utilities."""

import pytest

from translation_health.utils.validators import (
    alpha_ratio,
    base_language,
    is_excluded_string,
    is_pure_emoji,
    is_rtl_locale,
    is_valid_locale_code,
    looks_like_css_classes,
    sanitize_key_name,
)


class TestLocaleCodes:
    """Test cases for locale code helpers."""

    @pytest.mark.parametrize('code', ['en', 'tr', 'ckb', 'pt-BR', 'zh-Hans', 'en-US'])
    def test_valid_codes(self, code):
        assert is_valid_locale_code(code)

    @pytest.mark.parametrize('code', ['', None, 'EN', 'english', 'en_US', 'en-', 'e'])
    def test_invalid_codes(self, code):
        assert not is_valid_locale_code(code)

    def test_base_language(self):
        assert base_language('ar-EG') == 'ar'
        assert base_language('PT_br') == 'pt'
        assert base_language('') == ''

    @pytest.mark.parametrize('locale,expected', [
        ('ar', True), ('ar-EG', True), ('ar_EG', True), ('he', True), ('fa-IR', True),
        ('ur', True), ('en', False), ('tr', False), ('de-AT', False),
    ])
    def test_rtl_locales(self, locale, expected):
        assert is_rtl_locale(locale) is expected


class TestSanitizeKeyName:
    """Test cases for key name generation."""

    def test_basic(self):
        assert sanitize_key_name("Click Me!", prefix='button') == 'button.click.me'

    def test_default_prefix(self):
        assert sanitize_key_name("Welcome back") == 'text.welcome.back'

    def test_first_four_words(self):
        assert sanitize_key_name("One two three four five") == 'text.one.two.three.four'

    def test_no_words(self):
        assert sanitize_key_name("!!!") == 'text.unnamed'


class TestExcludedStrings:
    """Test cases for strings that are never user-facing text."""

    @pytest.mark.parametrize('text', [
        "https://example.com/help",
        "www.example.com",
        "/settings/profile",
        "123.45",
        "API_KEY",
        "common.save",
        "userName",
        "user_name",
        "primary-button",
        "#ff00aa",
        "{{ name }}",
        "%d",
        "...",
        "   ",
        "a",
        "",
    ])
    def test_excluded(self, text):
        assert is_excluded_string(text)

    @pytest.mark.parametrize('text', [
        "Save changes",
        "Hello, world!",
        "Sepete ekle",
        "مرحبا بك",
        "🎉 Party time",
    ])
    def test_user_facing(self, text):
        assert not is_excluded_string(text)


class TestEmoji:
    """Emoji-only stringler rapor edilmemeli."""

    @pytest.mark.parametrize('text', ["🎉", "🔥🔥", "❤️", "👍 ", "🚀✨"])
    def test_pure_emoji(self, text):
        assert is_pure_emoji(text)
        assert is_excluded_string(text)

    def test_mixed_text(self):
        assert not is_pure_emoji("🎉 Party")


class TestCssClasses:
    """Test cases for CSS class list detection."""

    @pytest.mark.parametrize('text', [
        "flex items-center gap-2",
        "md:px-4 hover:bg-blue-500",
        "hidden",
        "text-sm font-bold",
    ])
    def test_class_lists(self, text):
        assert looks_like_css_classes(text)

    @pytest.mark.parametrize('text', [
        "save changes",
        "Save changes",
        "Add to cart",
        "",
    ])
    def test_not_class_lists(self, text):
        assert not looks_like_css_classes(text)


class TestAlphaRatio:
    """Test cases for alpha_ratio."""

    def test_empty(self):
        assert alpha_ratio('') == 0.0

    def test_all_letters(self):
        assert alpha_ratio('abc') == 1.0

    def test_mixed(self):
        assert alpha_ratio('a1') == 0.5
        assert alpha_ratio('ab12') == 0.5
