"""Tests for HarpncConfig loading and validation."""

import pytest
from pydantic import ValidationError

from harpnc.core.config import HarpncConfig, resolve_config
from harpnc.core.exceptions import ConfigurationError

pytestmark = [pytest.mark.unit, pytest.mark.config]


class TestDefaults:

    def test_default_values(self):
        config = HarpncConfig.default()
        assert config.netcdf_format == 'NETCDF3_CLASSIC'
        assert config.atomic_write is True
        assert config.string_encoding == 'utf-8'
        assert config.log_level == 'INFO'

    def test_resolve_none_gives_defaults(self):
        assert resolve_config(None) == HarpncConfig.default()

    def test_resolve_keeps_given_config(self):
        config = HarpncConfig(netcdf_format='NETCDF4_CLASSIC')
        assert resolve_config(config) is config

    def test_config_is_frozen(self):
        config = HarpncConfig.default()
        with pytest.raises(ValidationError):
            config.atomic_write = False


class TestFromDict:

    def test_accepts_aliases(self):
        config = HarpncConfig.from_dict({'NETCDF_FORMAT': 'netcdf4_classic', 'ATOMIC_WRITE': False})
        assert config.netcdf_format == 'NETCDF4_CLASSIC'
        assert config.atomic_write is False

    def test_accepts_field_names(self):
        config = HarpncConfig.from_dict({'log_level': 'debug'})
        assert config.log_level == 'DEBUG'

    def test_rejects_unknown_format(self):
        with pytest.raises(ConfigurationError, match="netcdf_format|NETCDF_FORMAT"):
            HarpncConfig.from_dict({'NETCDF_FORMAT': 'NETCDF4'})

    def test_rejects_unknown_encoding(self):
        with pytest.raises(ConfigurationError, match="encoding"):
            HarpncConfig.from_dict({'STRING_ENCODING': 'no-such-codec'})


class TestFromFile:

    def test_loads_yaml(self, tmp_path):
        path = tmp_path / 'harpnc.yaml'
        path.write_text("NETCDF_FORMAT: NETCDF3_64BIT_OFFSET\nSTRING_ENCODING: latin-1\n")
        config = HarpncConfig.from_file(path)
        assert config.netcdf_format == 'NETCDF3_64BIT_OFFSET'
        assert config.string_encoding == 'latin-1'

    def test_overrides_win_over_file(self, tmp_path):
        path = tmp_path / 'harpnc.yaml'
        path.write_text("NETCDF_FORMAT: NETCDF3_64BIT_OFFSET\n")
        config = HarpncConfig.from_file(path, overrides={'netcdf_format': 'NETCDF4_CLASSIC'})
        assert config.netcdf_format == 'NETCDF4_CLASSIC'

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / 'harpnc.yaml'
        path.write_text("")
        assert HarpncConfig.from_file(path) == HarpncConfig.default()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            HarpncConfig.from_file(tmp_path / 'missing.yaml')

    def test_non_mapping_content(self, tmp_path):
        path = tmp_path / 'harpnc.yaml'
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            HarpncConfig.from_file(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / 'harpnc.yaml'
        path.write_text("NETCDF_FORMAT: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Cannot parse"):
            HarpncConfig.from_file(path)
