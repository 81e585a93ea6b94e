import pytest

from catalog_admin.config import Config


class TestConfig:

    def test_validate_names_missing_setting(self, monkeypatch):
        monkeypatch.setattr(Config, "TELEGRAM_TOKEN", "token")
        monkeypatch.setattr(Config, "SUPABASE_URL", "https://example.supabase.co")
        monkeypatch.setattr(Config, "SUPABASE_KEY", "")
        with pytest.raises(ValueError, match="SUPABASE_KEY"):
            Config.validate()

    def test_validate_passes_when_complete(self, monkeypatch):
        monkeypatch.setattr(Config, "TELEGRAM_TOKEN", "token")
        monkeypatch.setattr(Config, "SUPABASE_URL", "https://example.supabase.co")
        monkeypatch.setattr(Config, "SUPABASE_KEY", "key")
        Config.validate()

    def test_defaults(self):
        assert Config.IMAGE_BUCKET
        assert Config.PRODUCTS_PAGE_SIZE > 0
