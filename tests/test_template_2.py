from pathlib import Path

from xpanda.__main__ import main

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_template_2_cli(capsys):
    main(['-i', str(EXAMPLES / 'template_2.txt'), '-f', str(EXAMPLES / 'template_2.vars'), '--', 'x', 'y'])
    out = capsys.readouterr().out
    assert out == (
        'Usage: x y\n'
        'first=x count=2\n'
        'fallback is set was empty\n'
        'yes\n'
    )
