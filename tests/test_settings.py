"""Tests for the persisted settings module."""

import tomllib

import pytest

from weatherornot.settings import (
    Settings,
    SettingsError,
    add_favorite,
    create_settings,
    default_settings,
    load_settings,
    mask_api_key,
    remove_favorite,
    resolve_location,
    save_settings,
    set_value,
)


@pytest.fixture()
def settings_path(tmp_path):
    return tmp_path / "config" / "weatherornot.toml"


class TestLoadAndSave:
    def test_missing_file_is_created_with_defaults(self, settings_path):
        settings = load_settings(settings_path)

        assert settings == default_settings()
        assert settings_path.exists()

    def test_defaults(self):
        settings = default_settings()

        assert settings.api_key == ""
        assert settings.provider == "OpenWeatherMap"
        assert settings.units == "imperial"
        assert settings.display_mode == "widget"
        assert settings.show_colors is True
        assert settings.favorites == {}

    def test_default_favorites_are_not_shared(self):
        a = default_settings()
        b = default_settings()
        a.favorites["home"] = "90210"

        assert b.favorites == {}

    def test_save_then_load(self, settings_path):
        settings = Settings(
            api_key="abc123",
            default_location="San Francisco,CA",
            units="metric",
            display_mode="neofetch",
            show_colors=False,
            favorites={"home": "90210", "work": "New York,NY,US"},
        )

        save_settings(settings, settings_path)

        assert load_settings(settings_path) == settings

    def test_file_is_toml(self, settings_path):
        create_settings(Settings(api_key="k", favorites={"home": "90210"}), settings_path)

        with settings_path.open("rb") as fh:
            data = tomllib.load(fh)

        assert data["api_key"] == "k"
        assert data["favorites"] == {"home": "90210"}

    def test_missing_keys_fall_back_to_defaults(self, settings_path):
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text('units = "metric"\n')

        settings = load_settings(settings_path)

        assert settings.units == "metric"
        assert settings.display_mode == "widget"
        assert settings.favorites == {}

    def test_malformed_toml_raises(self, settings_path):
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text("units = \n")

        with pytest.raises(SettingsError, match="Error reading"):
            load_settings(settings_path)

    def test_wrong_type_raises(self, settings_path):
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text("show_colors = \"maybe\"\n")

        with pytest.raises(SettingsError, match="show_colors"):
            load_settings(settings_path)

    def test_non_string_favorite_raises(self, settings_path):
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text("[favorites]\nhome = 90210\n")

        with pytest.raises(SettingsError, match="Favorite"):
            load_settings(settings_path)

    def test_unwritable_path_raises(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        with pytest.raises(SettingsError, match="Could not write"):
            save_settings(default_settings(), blocker / "weatherornot.toml")

    def test_uses_configured_path(self, settings_path, monkeypatch):
        monkeypatch.setenv("WEATHERORNOT_CONFIG", str(settings_path))

        load_settings()

        assert settings_path.exists()


class TestSetValue:
    def test_api_key(self):
        settings = default_settings()
        set_value(settings, "api_key", "new-key")
        assert settings.api_key == "new-key"

    def test_default_location(self):
        settings = default_settings()
        set_value(settings, "default_location", "90210")
        assert settings.default_location == "90210"

    @pytest.mark.parametrize("units", ["metric", "imperial", "standard"])
    def test_valid_units(self, units):
        settings = default_settings()
        set_value(settings, "units", units)
        assert settings.units == units

    def test_invalid_units(self):
        with pytest.raises(SettingsError, match="units must be"):
            set_value(default_settings(), "units", "kelvin")

    def test_valid_display_mode(self):
        settings = default_settings()
        set_value(settings, "display_mode", "neofetch")
        assert settings.display_mode == "neofetch"

    def test_invalid_display_mode(self):
        with pytest.raises(SettingsError, match="display_mode must be"):
            set_value(default_settings(), "display_mode", "fancy")

    @pytest.mark.parametrize("raw, expected", [("true", True), ("False", False), ("0", False), ("yes", True)])
    def test_show_colors(self, raw, expected):
        settings = default_settings()
        set_value(settings, "show_colors", raw)
        assert settings.show_colors is expected

    def test_invalid_show_colors(self):
        with pytest.raises(SettingsError, match="show_colors must be"):
            set_value(default_settings(), "show_colors", "sometimes")

    def test_unknown_key(self):
        with pytest.raises(SettingsError, match="Unknown config key"):
            set_value(default_settings(), "provider", "Other")


class TestFavorites:
    def test_add_and_remove(self):
        settings = default_settings()
        add_favorite(settings, "home", "90210")
        assert settings.favorites == {"home": "90210"}

        remove_favorite(settings, "home")
        assert settings.favorites == {}

    def test_add_overwrites(self):
        settings = default_settings()
        add_favorite(settings, "home", "90210")
        add_favorite(settings, "home", "10001")
        assert settings.favorites["home"] == "10001"

    def test_remove_missing_raises(self):
        with pytest.raises(SettingsError, match="'home' not found"):
            remove_favorite(default_settings(), "home")


class TestResolveLocation:
    @pytest.fixture()
    def settings(self):
        return Settings(default_location="Denver,CO", favorites={"home": "90210"})

    def test_favorite_wins(self, settings):
        assert resolve_location(settings, favorite="home", argument="Paris") == "90210"

    def test_argument_over_default(self, settings):
        assert resolve_location(settings, argument="Paris") == "Paris"

    def test_default_location(self, settings):
        assert resolve_location(settings) == "Denver,CO"

    def test_unknown_favorite_raises(self, settings):
        with pytest.raises(SettingsError, match="'cabin' not found"):
            resolve_location(settings, favorite="cabin")

    def test_nothing_configured_raises(self):
        with pytest.raises(SettingsError, match="No location specified"):
            resolve_location(default_settings())


class TestMaskApiKey:
    def test_short_key_fully_masked(self):
        assert mask_api_key("abcd1234") == "********"

    def test_long_key_shows_ends(self):
        assert mask_api_key("abcd1234efgh5678") == "abcd********5678"

    def test_empty_key(self):
        assert mask_api_key("") == ""
