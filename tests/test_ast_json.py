import json

import pytest

from runel.ast_json import ast_from_obj, ast_to_obj
from runel.interpreter import Interpreter, parse_program
from runel.types import StringVal

SOURCE = 'let greeting = "hi " + 3\nlet n = 2\ngreeting * n\n'


def test_round_trip_through_json():
    program = parse_program(SOURCE)
    text = json.dumps(ast_to_obj(program))
    assert ast_from_obj(json.loads(text)) == program


def test_object_shape():
    obj = ast_to_obj(parse_program('x + 1'))
    assert obj == {
        'type': 'Program',
        'body': [{
            'type': 'ExpressionStatement',
            'expression': {
                'type': 'Binary',
                'left': {'type': 'Variable', 'name': 'x'},
                'op': 'ADDITION',
                'right': {'type': 'ValueLiteral', 'value': {'type': 'Number', 'value': 1}},
            },
        }],
        'lines': [1],
    }


def test_loaded_program_runs():
    program = ast_from_obj(json.loads(json.dumps(ast_to_obj(parse_program(SOURCE)))))
    assert Interpreter().run(program) == StringVal('hi 3hi 3')


def test_unknown_node_type():
    with pytest.raises(ValueError):
        ast_from_obj({'type': 'WhileStmt'})
    with pytest.raises(ValueError):
        ast_from_obj({'type': 'ValueLiteral', 'value': {'type': 'Float', 'value': 1.5}})


def test_number_outside_int64_is_rejected():
    with pytest.raises(ValueError, match='64-bit'):
        ast_from_obj({'type': 'ValueLiteral', 'value': {'type': 'Number', 'value': 2 ** 63}})
    literal = ast_from_obj({'type': 'ValueLiteral', 'value': {'type': 'Number', 'value': -(2 ** 63)}})
    assert literal.value.value == -(2 ** 63)


def test_program_line_numbers_must_match_body():
    obj = ast_to_obj(parse_program('1\n2'))
    obj['lines'] = [1]
    with pytest.raises(ValueError, match='2 statements but 1 line numbers'):
        ast_from_obj(obj)
    del obj['lines']
    assert ast_from_obj(obj).lines == []
