import pytest
from pydantic import ValidationError

from cashola.config import CasholaConfig, load_config


def test_defaults():
    cfg = CasholaConfig()
    assert cfg.storage_dir == '.cashola/'
    assert cfg.ignore_cashola_env_var == 'IGNORE_CASHOLA'
    assert cfg.ignore_cashola is False


def test_camel_case_aliases():
    cfg = CasholaConfig.model_validate({'storageDir': 'x', 'ignoreCasholaEnvVar': 'SKIP', 'ignoreCashola': True})
    assert cfg.storage_dir == 'x'
    assert cfg.ignore_cashola_env_var == 'SKIP'
    assert cfg.ignore_cashola is True


def test_is_ignored_rules():
    cfg = CasholaConfig()
    assert cfg.is_ignored({}) is False
    assert cfg.is_ignored({'IGNORE_CASHOLA': 'true'}) is True
    # exact string only
    assert cfg.is_ignored({'IGNORE_CASHOLA': 'True'}) is False
    assert cfg.is_ignored({'IGNORE_CASHOLA': '1'}) is False
    named = CasholaConfig(ignore_cashola_env_var='SKIP_IT')
    assert named.is_ignored({'IGNORE_CASHOLA': 'true'}) is False
    assert named.is_ignored({'SKIP_IT': 'true'}) is True
    assert CasholaConfig(ignore_cashola=True).is_ignored({}) is True


def test_is_ignored_reads_process_environment(monkeypatch):
    cfg = CasholaConfig()
    monkeypatch.setenv('IGNORE_CASHOLA', 'true')
    assert cfg.is_ignored() is True


def test_updated_only_touches_given_options():
    cfg = CasholaConfig(storage_dir='a', ignore_cashola=True)
    new = cfg.updated(ignoreCasholaEnvVar='OTHER')
    assert new.storage_dir == 'a'
    assert new.ignore_cashola is True
    assert new.ignore_cashola_env_var == 'OTHER'
    assert cfg.ignore_cashola_env_var == 'IGNORE_CASHOLA'


def test_invalid_options_are_rejected():
    with pytest.raises(ValidationError):
        CasholaConfig().updated(unknown_option=1)
    with pytest.raises(ValidationError):
        CasholaConfig(storage_dir='')


def test_load_config_from_yaml(tmp_path):
    p = tmp_path / 'cashola.yml'
    p.write_text('storageDir: data/state\nignore_cashola: false\nlog_level: debug\n', encoding='utf-8')
    cfg = load_config(p)
    assert cfg.storage_dir == 'data/state'
    assert cfg.log_level == 'debug'


def test_load_config_missing_or_empty_file(tmp_path):
    assert load_config(tmp_path / 'nope.yml').model_dump() == CasholaConfig().model_dump()
    empty = tmp_path / 'empty.yml'
    empty.write_text('', encoding='utf-8')
    assert load_config(empty).model_dump() == CasholaConfig().model_dump()
