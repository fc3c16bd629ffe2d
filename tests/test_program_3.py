from pathlib import Path
from runel.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_3_repeat_string():
    with open(EXAMPLES / 'program_3.runel', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    result = interp.run(ast)
    assert repr(result) == 'String("ababab")'
