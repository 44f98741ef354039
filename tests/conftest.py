from pathlib import Path

import pytest

from gconfig import ConfigFile, load_json_file

TEST_DATA_DIR = Path(__file__).parent / 'testdata'


@pytest.fixture
def config_file() -> ConfigFile:
    return load_json_file(TEST_DATA_DIR / 'config.json')
