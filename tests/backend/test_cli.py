import json
import logging

import pytest

from cashola import Cashola, CasholaConfig
from cashola import cli


@pytest.fixture(autouse=True)
def _in_tmp(tmp_path, monkeypatch):
    # keep the default cashola.yml / .cashola/ lookups inside tmp_path
    monkeypatch.chdir(tmp_path)
    handlers, level = logging.root.handlers[:], logging.root.level
    yield
    # the commands reconfigure root logging; hand it back to pytest
    for h in logging.root.handlers[:]:
        logging.root.removeHandler(h)
    for h in handlers:
        logging.root.addHandler(h)
    logging.root.setLevel(level)


def seed(storage_dir, *keys):
    ctx = Cashola(CasholaConfig(storage_dir=str(storage_dir)))
    for key in keys:
        ctx.remember_sync(key, {'key': key})


def test_clear_one_key(tmp_path):
    store = tmp_path / 'store'
    seed(store, 'a', 'b')
    assert cli.clear_main(['a', str(store)]) == 0
    assert not (store / 'a.json').exists()
    assert json.loads((store / 'b.json').read_text(encoding='utf-8')) == {'key': 'b'}


def test_clear_missing_key_fails(tmp_path):
    assert cli.clear_main(['ghost', str(tmp_path / 'store')]) == 1


def test_clear_without_key_is_usage_error(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.clear_main([])
    assert exc.value.code == 2
    assert 'key' in capsys.readouterr().err


def test_clear_invalid_key_fails(tmp_path):
    assert cli.clear_main(['a:b', str(tmp_path)]) == 1


def test_clear_all_default_directory(tmp_path):
    seed(tmp_path / '.cashola', 'x')
    assert cli.clear_all_main([]) == 0
    assert not (tmp_path / '.cashola').exists()
    # nothing left to clear is still success
    assert cli.clear_all_main([]) == 0


def test_clear_all_uses_config_file(tmp_path):
    seed(tmp_path / 'configured', 'x')
    (tmp_path / 'cashola.yml').write_text('storage_dir: configured\nlog_level: debug\n', encoding='utf-8')
    assert cli.clear_all_main([]) == 0
    assert not (tmp_path / 'configured').exists()


def test_positional_directory_overrides_config(tmp_path):
    seed(tmp_path / 'positional', 'x')
    seed(tmp_path / 'configured', 'x')
    cfg = tmp_path / 'other.yml'
    cfg.write_text('storageDir: configured\n', encoding='utf-8')
    assert cli.clear_main(['x', 'positional', '--config', str(cfg)]) == 0
    assert not (tmp_path / 'positional' / 'x.json').exists()
    assert (tmp_path / 'configured' / 'x.json').exists()


def test_module_dispatch(tmp_path):
    seed(tmp_path / '.cashola', 'x')
    assert cli.main(['clear', 'x']) == 0
    assert cli.main(['clear-all']) == 0
    assert cli.main(['unknown']) == 2
    assert cli.main([]) == 2
