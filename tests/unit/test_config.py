"""Unit tests for generator configuration loading and validation."""
import json

import pytest

from sqlite_codegen.codegen.core.config import ConfigError, ConfigManager
from sqlite_codegen.codegen.core.config import GeneratorConfig, load_config


class TestLoadConfig:

    def test_defaults(self):
        config = GeneratorConfig()
        assert config.add_comments is True
        assert config.generate_manifest is True
        assert config.type_overrides == {}
        assert config.on_name_collision == 'warn'

    def test_language_defaults(self):
        config = load_config('python')
        assert config.language_config['runtime_module'] == 'sqlite_codegen.runtime'
        assert config.language_config['dataclass_slots'] is True

        config = load_config('typescript')
        assert config.language_config['db_import'] == 'bun:sqlite'

    def test_unknown_keys_go_to_language_config(self):
        config = load_config('python', custom_config={'dataclass_frozen': True})
        assert config.language_config['dataclass_frozen'] is True
        assert config.language_config['dataclass_slots'] is True

    def test_overrides_do_not_leak_into_defaults(self):
        load_config('python', custom_config={'language_config': {'unknown_type': 'object'}})
        assert load_config('python').language_config['unknown_type'] == 'Any'

    def test_config_file_then_custom(self, tmp_path):
        path = tmp_path / 'codegen.json'
        path.write_text(json.dumps({
            'add_comments': False,
            'on_name_collision': 'error',
            'type_overrides': {'JSONB': 'dict'},
        }))

        config = load_config('python', custom_config={'add_comments': True}, config_file=path)
        assert config.add_comments is True
        assert config.on_name_collision == 'error'
        assert config.type_overrides == {'JSONB': 'dict'}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config('python', config_file=tmp_path / 'missing.json')

    def test_non_json_suffix(self, tmp_path):
        path = tmp_path / 'codegen.yaml'
        path.write_text('add_comments: false')
        with pytest.raises(ConfigError):
            load_config('python', config_file=path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / 'codegen.json'
        path.write_text('{not json')
        with pytest.raises(ConfigError):
            load_config('python', config_file=path)

    def test_json_must_be_object(self, tmp_path):
        path = tmp_path / 'codegen.json'
        path.write_text('[1, 2]')
        with pytest.raises(ConfigError):
            load_config('python', config_file=path)


class TestValidateConfig:

    def test_valid(self):
        manager = ConfigManager()
        assert manager.validate_config(manager.get_config('python'), 'python') == []

    def test_bad_collision_policy(self):
        manager = ConfigManager()
        config = GeneratorConfig(on_name_collision='ignore')
        assert any('on_name_collision' in w for w in manager.validate_config(config, 'typescript'))

    def test_bad_override(self):
        manager = ConfigManager()
        config = GeneratorConfig(type_overrides={'JSONB': ''})
        assert manager.validate_config(config, 'typescript')

    def test_bad_runtime_module(self):
        manager = ConfigManager()
        config = manager.get_config('python', {'runtime_module': 'not a module'})
        assert manager.validate_config(config, 'python')

    def test_list_languages(self):
        assert sorted(ConfigManager().list_languages()) == ['python', 'typescript']
