import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Generator

import pytest

from gconfig import ConfigFile, ConfigParseError, load, load_json_file, load_yaml_file, strip_comments

TEST_DATA_DIR = Path(__file__).parent / 'testdata'


@contextmanager
def reload_config_env(env: Dict[str, str]) -> Generator[None, None, None]:
    saved_env = os.environ.copy()
    os.environ = env  # type: ignore
    ConfigFile._reload()  # pylint: disable=protected-access
    try:
        yield
    finally:
        os.environ = saved_env  # type: ignore
        ConfigFile._reload()  # pylint: disable=protected-access


def test_strip_comments() -> None:
    text = '{\n  // comment\n  "a": 1, // trailing\n  "b": "http://host//x"\n}'
    assert strip_comments(text) == '{\n  \n  "a": 1, \n  "b": "http://host//x"\n}'
    # comment at end of file without newline
    assert strip_comments('{} // end') == '{} '
    # escaped quote does not end the string
    assert strip_comments('"a\\"//b" // c') == '"a\\"//b" '
    assert strip_comments('') == ''


def test_load_json_file() -> None:
    config = load_json_file(str(TEST_DATA_DIR / 'config.json'))
    assert config.get_str('url') == 'http://example.com/path'
    assert config.get_float('int') == 1.0


def test_load_json_file_log(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger='gconfig'):
        config = load_json_file(TEST_DATA_DIR / 'config.json')
    assert f'Loaded config {config.file} with {len(config)} keys' in caplog.text


def test_load_json_file_errors(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_json_file(tmp_path / 'not_exist.json')

    bad_file = tmp_path / 'bad.json'
    bad_file.write_text('{\n  "a": 1\n  "b": 2\n}', encoding='utf-8')
    with pytest.raises(ConfigParseError) as e:
        load_json_file(bad_file)
    assert e.value.file == str(bad_file)
    assert 'line 3' in str(e.value)

    list_file = tmp_path / 'list.json'
    list_file.write_text('[1, 2]', encoding='utf-8')
    with pytest.raises(ConfigParseError) as e:
        load_json_file(list_file)
    assert 'not an object' in str(e.value)

    binary_file = tmp_path / 'binary.json'
    binary_file.write_bytes(b'{"a": "\xff\xfe"}')
    with pytest.raises(ConfigParseError):
        load_json_file(binary_file)


@pytest.mark.parametrize('constant', ['NaN', 'Infinity', '-Infinity'])
def test_load_json_file_rejects_constants(tmp_path: Path, constant: str) -> None:
    config_file = tmp_path / 'config.json'
    config_file.write_text(f'{{"a": {constant}}}', encoding='utf-8')
    with pytest.raises(ConfigParseError) as e:
        load_json_file(config_file)
    assert f'{constant} is not valid JSON' in str(e.value)


def test_load_json_comment_keeps_line_numbers(tmp_path: Path) -> None:
    config_file = tmp_path / 'config.json'
    config_file.write_text('{\n// one\n// two\n  "a": ,\n}', encoding='utf-8')
    with pytest.raises(ConfigParseError) as e:
        load_json_file(config_file)
    assert 'line 4' in str(e.value)


def test_load_yaml_file(tmp_path: Path) -> None:
    config = load_yaml_file(TEST_DATA_DIR / 'config.yml')
    assert config.get_bool('bool') is True
    assert isinstance(config.get('int'), float)
    assert config.get_map_float('map_string_float64') == {'a': 1.0, 'b': 2.5}
    assert config.get_list_float('slice_float64') == [1.0, 2.5, 3.0]

    bad_file = tmp_path / 'bad.yml'
    bad_file.write_text('a: [1, 2', encoding='utf-8')
    with pytest.raises(ConfigParseError):
        load_yaml_file(bad_file)
    empty_file = tmp_path / 'empty.yml'
    empty_file.write_text('', encoding='utf-8')
    with pytest.raises(ConfigParseError):
        load_yaml_file(empty_file)
    # nested maps must have string keys too
    int_key_file = tmp_path / 'int_key.yml'
    int_key_file.write_text('m:\n  1: true\n', encoding='utf-8')
    with pytest.raises(ConfigParseError) as e:
        load_yaml_file(int_key_file)
    assert 'map keys must be strings' in str(e.value)


def test_load_by_extension() -> None:
    assert load(TEST_DATA_DIR / 'config.yml').get_str('string') == 'foo'
    assert load(TEST_DATA_DIR / 'config.json').get_str('string') == 'foo'


def test_load_from_env_file(tmp_path: Path) -> None:
    config_file = tmp_path / 'my_config.json'
    config_file.write_text('{"name": "from_env"}', encoding='utf-8')
    with reload_config_env({'GCONFIG_FILE': str(config_file)}):
        assert ConfigFile.GCONFIG_FILE == str(config_file)
        assert load().get_str('name') == 'from_env'
    # also test reload_config_env
    assert ConfigFile.GCONFIG_FILE == os.getenv('GCONFIG_FILE', '')


def test_load_from_project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    work_dir = tmp_path / 'work'
    work_dir.mkdir()
    monkeypatch.chdir(work_dir)
    project_dir = tmp_path / 'project'
    (project_dir / 'config').mkdir(parents=True)
    (project_dir / 'config' / 'config.json').write_text('{"where": "config_dir"}', encoding='utf-8')
    with reload_config_env({'PROJECT_ROOT_DIR': str(project_dir)}):
        assert load().get_str('where') == 'config_dir'
        # project root wins over its config/ sub directory
        (project_dir / 'config.json').write_text('{"where": "root"}', encoding='utf-8')
        assert load().get_str('where') == 'root'
        # current directory wins over project root
        (work_dir / 'config.json').write_text('{"where": "cwd"}', encoding='utf-8')
        assert load().get_str('where') == 'cwd'


def test_load_not_found(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    monkeypatch.chdir(tmp_path)
    with reload_config_env({'CI_PROJECT_DIR': str(tmp_path)}):
        assert ConfigFile.PROJECT_ROOT_DIR == str(tmp_path)
        with caplog.at_level(logging.WARNING, logger='gconfig'):
            with pytest.raises(FileNotFoundError) as e:
                load()
    assert str(tmp_path) in str(e.value)
    assert 'config.json' in str(e.value)
    assert 'Can not find config file config.json from' in caplog.text


if __name__ == '__main__':
    pytest.main([__file__, '--log-cli-level=DEBUG'])
