"""配置加载器测试"""

import pytest

from yrbac.config import AppSettings, ConfigLoader, ConfigManager, load_yaml_config


SETTINGS_YAML = """
database:
  url: "sqlite:///./rbac.db"
  echo: true

jwt:
  secret_key: "yaml-secret"
  access_token_expire_minutes: 60

rbac:
  authority_mode: permission
  static_authority: [1, 2]
"""


@pytest.fixture(autouse=True)
def clear_loader_cache():
    ConfigLoader.clear_cache()
    yield
    ConfigLoader.clear_cache()


@pytest.fixture
def settings_file(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(SETTINGS_YAML, encoding="utf-8")
    return path


class TestConfigLoader:

    def test_load(self, settings_file):
        config = ConfigLoader.load(str(settings_file))

        assert config["database"]["url"] == "sqlite:///./rbac.db"
        assert config["rbac"]["static_authority"] == [1, 2]

    def test_cached(self, settings_file):
        first = ConfigLoader.load(str(settings_file))
        settings_file.write_text("database: {url: changed}", encoding="utf-8")

        assert ConfigLoader.load(str(settings_file)) is first
        assert ConfigLoader.reload(str(settings_file))["database"]["url"] == "changed"
        assert str(settings_file) in ConfigLoader.get_cached_paths()

    def test_base_dir(self, settings_file):
        config = ConfigLoader.load("settings.yaml", base_dir=str(settings_file.parent))

        assert config["jwt"]["secret_key"] == "yaml-secret"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigLoader.load(str(tmp_path / "missing.yaml"))

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert ConfigLoader.load(str(path)) == {}


class TestLoadYamlConfig:

    def test_builds_settings(self, settings_file):
        settings = load_yaml_config(str(settings_file), AppSettings)

        assert settings.database.echo is True
        assert settings.jwt.secret_key == "yaml-secret"
        assert settings.jwt.access_token_expire_minutes == 60
        assert settings.rbac.authority_mode == "permission"
        assert settings.pagination.max_page_size == 1000

    def test_overrides_do_not_touch_cache(self, settings_file):
        settings = load_yaml_config(str(settings_file), AppSettings, rbac={"authority_mode": "static"})

        assert settings.rbac.authority_mode == "static"
        assert ConfigLoader.load(str(settings_file))["rbac"]["authority_mode"] == "permission"


class TestConfigManager:

    def test_merge_and_dotted_access(self, tmp_path, settings_file):
        (tmp_path / "settings.dev.yaml").write_text("database:\n  echo: false\n", encoding="utf-8")
        manager = ConfigManager(base_dir=str(tmp_path))

        manager.load("settings.yaml")
        manager.load("settings.dev.yaml", merge=True)

        assert manager.get("database.echo") is False
        assert manager.get("database.url") == "sqlite:///./rbac.db"
        assert manager.get("database.missing", "default") == "default"
        assert ConfigLoader.load(str(settings_file))["database"]["echo"] is True

    def test_set(self, tmp_path, settings_file):
        manager = ConfigManager(base_dir=str(tmp_path))
        manager.load("settings.yaml")

        manager.set("rbac.route_include_hidden", False)
        manager.set("new.section.value", 1)

        assert manager.get("rbac.route_include_hidden") is False
        assert manager.to_dict()["new"]["section"]["value"] == 1
