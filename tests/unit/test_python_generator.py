"""Unit tests for Python code generation."""
import ast

import pytest

from sqlite_codegen import generate_from_schema
from sqlite_codegen.codegen import GeneratorError


def _functions(code):
    tree = ast.parse(code)
    return {node.name: node for node in tree.body if isinstance(node, ast.FunctionDef)}


def _classes(code):
    tree = ast.parse(code)
    return {node.name: node for node in tree.body if isinstance(node, ast.ClassDef)}


def _params(function):
    return [arg.arg for arg in function.args.args]


class TestUnits:

    def test_one_unit_per_table(self, full_schema):
        result = generate_from_schema(full_schema)
        assert result.success
        assert list(result.units) == ['users', 'memberships', 'events']
        assert [u.file_name for u in result.files] == [
            'users.py', 'memberships.py', 'events.py', '__init__.py',
        ]

    def test_every_unit_parses(self, full_schema):
        result = generate_from_schema(full_schema)
        for unit in result.files:
            ast.parse(unit.code)

    def test_users_functions(self, users_schema):
        code = generate_from_schema(users_schema).units['users'].code
        functions = _functions(code)

        assert list(functions) == [
            'insert_users', 'get_all_users', 'get_users', 'update_users', 'delete_users',
        ]
        assert _params(functions['get_users']) == ['conn', 'id']
        assert _params(functions['update_users']) == ['conn', 'id', 'changes']
        assert _params(functions['delete_users']) == ['conn', 'id']

    def test_record_fields_follow_columns(self, users_schema):
        code = generate_from_schema(users_schema).units['users'].code
        assert 'class Users:' in code
        assert 'class UsersPartial:' in code
        assert '    id: int\n' in code
        assert '    username: str\n' in code
        assert '    bio: str | None\n' in code
        assert '    created_at: str | None\n' in code
        assert '    bio: str | None | Unset = UNSET\n' in code

    def test_table_without_key(self, events_schema):
        code = generate_from_schema(events_schema).units['events'].code
        assert list(_functions(code)) == ['insert_events', 'get_all_events']
        assert 'PRIMARY_KEY' not in code
        assert 'build_update' not in code
        assert '    payload: Any | None\n' in code

    def test_composite_key_order(self, membership_schema):
        code = generate_from_schema(membership_schema).units['memberships'].code
        functions = _functions(code)

        assert _params(functions['get_memberships']) == ['conn', 'user_id', 'org_id']
        assert _params(functions['delete_memberships']) == ['conn', 'user_id', 'org_id']
        assert "PRIMARY_KEY = ('user_id', 'org_id')" in code
        assert 'WHERE "user_id" = ? AND "org_id" = ?' in code

    def test_manifest(self, full_schema):
        manifest = generate_from_schema(full_schema).manifest.code
        lines = [line for line in manifest.splitlines() if line.startswith('from .')]
        assert lines == [
            'from .users import *  # noqa: F401,F403',
            'from .memberships import *  # noqa: F401,F403',
            'from .events import *  # noqa: F401,F403',
        ]

    def test_no_manifest(self, users_schema):
        result = generate_from_schema(users_schema, config={'generate_manifest': False})
        assert result.manifest is None
        assert [u.file_name for u in result.files] == ['users.py']

    def test_no_comments(self, users_schema):
        code = generate_from_schema(users_schema, config={'add_comments': False}).units['users'].code
        assert '"""' not in code

    def test_frozen_dataclasses(self, users_schema):
        code = generate_from_schema(
            users_schema, config={'dataclass_frozen': True, 'dataclass_slots': False}
        ).units['users'].code
        assert '@dataclass(frozen=True)' in code


class TestDeterminism:

    def test_idempotent(self, full_schema):
        first = generate_from_schema(full_schema)
        second = generate_from_schema(full_schema)
        assert [u.code for u in first.files] == [u.code for u in second.files]

    def test_formatting(self, full_schema):
        for unit in generate_from_schema(full_schema).files:
            assert unit.code.endswith('\n') and not unit.code.endswith('\n\n')
            assert '\n\n\n\n' not in unit.code
            assert all(line == line.rstrip() for line in unit.code.splitlines())


class TestNames:

    def test_awkward_identifiers(self):
        schema = 'CREATE TABLE "class" ("from" TEXT, "first name" TEXT, conn INTEGER PRIMARY KEY);'
        result = generate_from_schema(schema)
        unit = result.units['class']
        assert unit.file_name == 'class_.py'

        code = unit.code
        ast.parse(code)
        assert 'class Class:' in code
        assert '    from_: str | None\n' in code
        assert '    first_name: str | None\n' in code
        assert _params(_functions(code)['get_class']) == ['conn', 'conn_']
        assert any('renamed' in w for w in result.warnings)

    def test_missing_key_warning(self, events_schema):
        result = generate_from_schema(events_schema)
        assert any("'events' has no primary key" in w for w in result.warnings)
        assert result.metadata['tables_without_primary_key'] == ['events']
        assert result.metadata['has_unknown_types'] is True

    def test_type_name_collision_warns(self):
        schema = 'CREATE TABLE user_accounts (id INTEGER); CREATE TABLE USER_ACCOUNTS_ (id INTEGER);'
        result = generate_from_schema(schema)
        assert result.success
        assert any('type name' in w for w in result.warnings)

    def test_type_name_collision_error(self):
        schema = 'CREATE TABLE user_accounts (id INTEGER); CREATE TABLE USER_ACCOUNTS_ (id INTEGER);'
        result = generate_from_schema(schema, config={'on_name_collision': 'error'})
        assert not result.success
        assert isinstance(result.exception, GeneratorError)


@pytest.mark.parametrize('language', ['python', 'typescript'])
def test_empty_schema(language):
    result = generate_from_schema('', language=language)
    assert result.success
    assert result.units == {}
    assert result.manifest is not None


class TestKeyedTables:

    def test_function_names_are_plain_identifiers(self, full_schema):
        for unit in generate_from_schema(full_schema).files:
            assert 'built-in method' not in unit.code
            assert ' object at 0x' not in unit.code

    def test_update_falls_back_to_get(self, users_schema):
        code = generate_from_schema(users_schema).units['users'].code
        assert '        return get_users(conn, id)\n' in code

    def test_header_is_a_comment(self, users_schema):
        code = generate_from_schema(users_schema).units['users'].code
        assert code.startswith('# Generated by sqlite-codegen. Do not edit by hand.\n')


class TestGeneratedColumns:

    SCHEMA = (
        'CREATE TABLE t (id INTEGER PRIMARY KEY, a INTEGER,'
        ' b INTEGER GENERATED ALWAYS AS (a * 2) VIRTUAL, c TEXT);'
    )

    def test_record_has_every_column(self):
        code = generate_from_schema(self.SCHEMA).units['t'].code
        record = _classes(code)['T']
        assert [n.target.id for n in record.body if isinstance(n, ast.AnnAssign)] == [
            'id', 'a', 'b', 'c',
        ]

    def test_partial_skips_generated_columns(self):
        code = generate_from_schema(self.SCHEMA).units['t'].code
        partial = _classes(code)['TPartial']
        assert [n.target.id for n in partial.body if isinstance(n, ast.AnnAssign)] == [
            'id', 'a', 'c',
        ]
        assert "'b'" not in code.split('def assigned')[1].split('def insert_t')[0]


class TestModuleGlobals:

    def test_table_named_unset_does_not_shadow_runtime(self):
        code = generate_from_schema('CREATE TABLE unset (id INTEGER PRIMARY KEY, v TEXT);').units['unset'].code
        classes = _classes(code)
        assert set(classes) == {'Unset_', 'Unset_Partial'}
        assert 'isinstance(self.v, Unset)' in code

    @pytest.mark.parametrize('table', ['any', 'sequence'])
    def test_typing_names_not_shadowed(self, table):
        result = generate_from_schema(f'CREATE TABLE {table} (id INTEGER PRIMARY KEY);')
        assert f'class {table.capitalize()}_:' in result.units[table].code


class TestExportCollisions:

    SCHEMA = (
        'CREATE TABLE users (id INTEGER PRIMARY KEY);'
        ' CREATE TABLE all_users (id INTEGER PRIMARY KEY);'
    )

    def test_shared_function_name_warns(self):
        result = generate_from_schema(self.SCHEMA)
        assert result.success
        assert any(
            "share the exported name 'get_all_users'" in w for w in result.warnings
        )

    def test_shared_function_name_error(self):
        result = generate_from_schema(self.SCHEMA, config={'on_name_collision': 'error'})
        assert not result.success
        assert isinstance(result.exception, GeneratorError)

    def test_ignored_without_manifest(self):
        result = generate_from_schema(
            self.SCHEMA, config={'generate_manifest': False, 'on_name_collision': 'error'}
        )
        assert result.success
        assert not any('exported name' in w for w in result.warnings)
