"""
Tests for config - command line flags and default paths.
"""
import importlib
import pytest
from pathlib import Path
from unittest.mock import patch

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

import audioqueue
from audioqueue import config


@pytest.fixture
def reload_with_argv():
    """Reload config under a given argv, restoring the real one afterwards."""
    def reload(argv):
        with patch.object(sys, 'argv', argv):
            return importlib.reload(config)
    yield reload
    importlib.reload(config)


class TestFlags:
    """Tests for sys.argv flags."""

    def test_mock_flag(self, reload_with_argv):
        assert reload_with_argv(['audioqueue', '--mock']).MOCK_MODE is True

    def test_unrelated_short_m_flag_is_ignored(self, reload_with_argv):
        """pytest -m <marker> must not switch the app to simulated audio."""
        assert reload_with_argv(['pytest', '-m', 'slow']).MOCK_MODE is False

    def test_empty_flag(self, reload_with_argv):
        reloaded = reload_with_argv(['audioqueue', '--empty'])
        assert reloaded.EMPTY_LIBRARY is True
        assert reloaded.MOCK_MODE is False


class TestPaths:
    """Tests for default data locations."""

    def test_data_dir_is_outside_installed_package(self):
        package_root = Path(audioqueue.__file__).parent.parent
        assert config.DATA_DIR == Path.home() / '.audioqueue'
        assert package_root not in config.DATA_DIR.parents

    def test_env_overrides_audio_dir(self, temp_dir):
        with patch.dict('os.environ', {'AUDIOQUEUE_AUDIO_DIR': str(temp_dir)}):
            reloaded = importlib.reload(config)
        try:
            assert reloaded.AUDIO_DIR == temp_dir
        finally:
            importlib.reload(config)
