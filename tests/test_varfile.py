import pytest

from xpanda.errors import VarFileError, VarSyntaxError
from xpanda.varfile import parse_named_arg, read_var_file


def test_parse_named_arg():
    assert parse_named_arg('NAME=value') == ('NAME', 'value')
    assert parse_named_arg('NAME=') == ('NAME', '')
    assert parse_named_arg('URL=http://host/?a=b') == ('URL', 'http://host/?a=b')
    assert parse_named_arg('WITH SPACE=a b') == ('WITH SPACE', 'a b')


@pytest.mark.parametrize('arg', ['NOEQUALS', ''])
def test_parse_named_arg_rejects_missing_equals(arg):
    with pytest.raises(VarSyntaxError) as excinfo:
        parse_named_arg(arg)
    assert excinfo.value.message == "'=' character missing in key value pair"


@pytest.mark.parametrize('arg', ['=value', '='])
def test_parse_named_arg_rejects_empty_name(arg):
    with pytest.raises(VarSyntaxError) as excinfo:
        parse_named_arg(arg)
    assert excinfo.value.message == 'variable name missing'


def test_read_var_file(tmp_path):
    path = tmp_path / 'vars.txt'
    path.write_bytes(b'A=1\n\n   \nB=two=2\r\nA=3\n')
    assert read_var_file(path) == {'A': '3', 'B': 'two=2'}


def test_read_var_file_reports_line(tmp_path):
    path = tmp_path / 'vars.txt'
    path.write_text('A=1\nbroken\n', encoding='utf-8')
    with pytest.raises(VarSyntaxError) as excinfo:
        read_var_file(path)
    assert 'vars.txt:2' in excinfo.value.message
    assert excinfo.value.line == 2


def test_read_missing_var_file(tmp_path):
    with pytest.raises(VarFileError):
        read_var_file(tmp_path / 'missing.txt')
