from pathlib import Path

import pytest

from xpanda import Xpanda, EvalError

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_template_3_required_variable():
    xpanda = Xpanda()
    source = (EXAMPLES / 'template_3.txt').read_text(encoding='utf-8')
    with pytest.raises(EvalError) as excinfo:
        xpanda.expand(source)
    assert excinfo.value.message == 'REQUIRED must be set'
    assert (excinfo.value.line, excinfo.value.col) == (2, 3)
    assert Xpanda.builder().with_named_vars({'REQUIRED': 'yes'}).build().expand(source) == 'ok\n  yes\n'
