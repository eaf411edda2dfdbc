from pathlib import Path

from xpanda import Xpanda
from xpanda.varfile import read_var_file

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_template_1_named_vars():
    variables = read_var_file(EXAMPLES / 'template_1.vars')
    xpanda = Xpanda.builder().with_named_vars(variables).build()
    with open(EXAMPLES / 'template_1.txt', 'r', encoding='utf-8') as f:
        out = ''.join(xpanda.expand(line) for line in f)
    assert out == (
        'Hello, Ada!\n'
        'You have 6 characters of items: apples\n'
        'Price: 5$ and $HOME stays literal\n'
        'Welcome from london\n'
    )
