import pytest
from mirror.config import (
    DEFAULT_TRUNCATION_PHRASES,
    SAMPLING_SOURCE,
    EngineConfig,
    load_config,
)
from mirror.errors import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("MIRROR_CONFIG", raising=False)
    monkeypatch.delenv("MIRROR_PROFILE", raising=False)


class TestEngineConfig:

    def test_defaults(self):
        config = EngineConfig()
        assert config.profile == "standard"
        assert config.default_max_tokens == 500
        assert config.default_temperature == 0.8
        assert config.system_role is False
        assert config.source == SAMPLING_SOURCE
        assert config.truncation_phrases == DEFAULT_TRUNCATION_PHRASES

    def test_extended_profile(self):
        assert EngineConfig(profile="extended").default_max_tokens == 1500

    def test_explicit_max_tokens_beats_profile(self):
        assert EngineConfig(profile="extended", default_max_tokens=800).default_max_tokens == 800

    def test_immutable(self):
        config = EngineConfig()
        with pytest.raises(AttributeError, match="immutable"):
            config.default_max_tokens = 10

    def test_phrases_lowercased(self):
        assert EngineConfig(truncation_phrases=["Context Window"]).truncation_phrases == ("context window",)

    @pytest.mark.parametrize("kwargs", [
        {"profile": "huge"},
        {"default_max_tokens": 0},
        {"default_max_tokens": 4001},
        {"default_max_tokens": "500"},
        {"default_temperature": 2.5},
        {"system_role": "yes"},
        {"source": ""},
        {"truncation_phrases": []},
        {"truncation_phrases": "token limit"},
        {"truncation_phrases": ["token limit", 3]},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ConfigError):
            EngineConfig(**kwargs)


class TestLoadConfig:

    def test_no_file_no_env(self):
        config = load_config()
        assert config.profile == "standard"
        assert config.default_max_tokens == 500

    def test_profile_from_env(self, monkeypatch):
        monkeypatch.setenv("MIRROR_PROFILE", "extended")
        assert load_config().default_max_tokens == 1500

    def test_explicit_profile_beats_env(self, monkeypatch):
        monkeypatch.setenv("MIRROR_PROFILE", "extended")
        assert load_config(profile="standard").default_max_tokens == 500

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "mirror.yaml"
        path.write_text(
            "profile: extended\n"
            "temperature: 0.4\n"
            "system_role: true\n"
            "source: my-host\n"
            "truncation_phrases:\n"
            "  - context window exceeded\n"
        )
        config = load_config(str(path))

        assert config.profile == "extended"
        assert config.default_max_tokens == 1500
        assert config.default_temperature == 0.4
        assert config.system_role is True
        assert config.source == "my-host"
        assert config.truncation_phrases == DEFAULT_TRUNCATION_PHRASES + ("context window exceeded",)

    def test_yaml_file_from_env(self, tmp_path, monkeypatch):
        path = tmp_path / "mirror.yaml"
        path.write_text("max_tokens: 750\n")
        monkeypatch.setenv("MIRROR_CONFIG", str(path))
        assert load_config().default_max_tokens == 750

    def test_empty_yaml_file(self, tmp_path):
        path = tmp_path / "mirror.yaml"
        path.write_text("")
        assert load_config(str(path)).default_max_tokens == 500

    def test_string_phrases_do_not_split_into_characters(self):
        with pytest.raises(ConfigError, match="list of strings"):
            EngineConfig(truncation_phrases="token limit")

    def test_override_phrases_extend_defaults(self):
        config = load_config(truncation_phrases=["Context Window Exceeded"])
        assert config.truncation_phrases == DEFAULT_TRUNCATION_PHRASES + ("context window exceeded",)

    def test_override_phrases_string_rejected(self):
        with pytest.raises(ConfigError, match="list of strings"):
            load_config(truncation_phrases="token limit")

    def test_override_and_file_phrases_both_kept(self, tmp_path):
        path = tmp_path / "mirror.yaml"
        path.write_text("truncation_phrases:\n  - output cut off\n")
        config = load_config(str(path), truncation_phrases=("context window exceeded",))
        assert config.truncation_phrases == DEFAULT_TRUNCATION_PHRASES + ("output cut off", "context window exceeded")

    def test_overrides_beat_file(self, tmp_path):
        path = tmp_path / "mirror.yaml"
        path.write_text("max_tokens: 750\n")
        assert load_config(str(path), default_max_tokens=100).default_max_tokens == 100

    def test_unknown_key_rejected(self, tmp_path):
        path = tmp_path / "mirror.yaml"
        path.write_text("max_token: 750\n")
        with pytest.raises(ConfigError, match="unknown keys: max_token"):
            load_config(str(path))

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "mirror.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigError, match="expected a mapping"):
            load_config(str(path))

    def test_bad_phrases_rejected(self, tmp_path):
        path = tmp_path / "mirror.yaml"
        path.write_text("truncation_phrases: token limit\n")
        with pytest.raises(ConfigError, match="truncation_phrases"):
            load_config(str(path))

    def test_python_tags_rejected(self, tmp_path):
        """safe_load refuses to construct arbitrary objects."""
        import yaml
        path = tmp_path / "mirror.yaml"
        path.write_text("source: !!python/object/apply:os.getcwd []\n")
        with pytest.raises(yaml.YAMLError):
            load_config(str(path))
