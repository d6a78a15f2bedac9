"""Unit tests for TypeScript code generation."""
import re

import pytest

from sqlite_codegen import generate_files, generate_from_schema


def _exported_functions(code):
    return re.findall(r'^export function (\w+)\(', code, re.MULTILINE)


def _signature(code, name):
    return re.search(rf'^export function {name}\((.*)\):', code, re.MULTILINE).group(1)


class TestTypeScriptUnits:

    def test_file_names(self, full_schema):
        result = generate_from_schema(full_schema, language='ts')
        assert [u.file_name for u in result.files] == [
            'users.ts', 'memberships.ts', 'events.ts', 'index.ts',
        ]

    def test_users_module(self, users_schema):
        code = generate_from_schema(users_schema, language='typescript').units['users'].code

        assert 'import { Database } from "bun:sqlite";' in code
        assert 'export interface Users {' in code
        assert '    id: number | bigint;' in code
        assert '    username: string;' in code
        assert '    bio: string | null;' in code
        assert _exported_functions(code) == [
            'insertUsers', 'getAllUsers', 'getUsers', 'updateUsers', 'deleteUsers',
        ]
        assert _signature(code, 'getUsers') == 'db: Database, id: number | bigint'
        assert 'const columns: string[] = ["id", "username", "bio", "created_at"];' in code

    def test_table_without_key(self, events_schema):
        code = generate_from_schema(events_schema, language='typescript').units['events'].code
        assert _exported_functions(code) == ['insertEvents', 'getAllEvents']
        assert '    payload: any | null;' in code

    def test_composite_key(self, membership_schema):
        code = generate_from_schema(membership_schema, language='typescript').units['memberships'].code
        assert _signature(code, 'deleteMemberships') == (
            'db: Database, user_id: number | bigint, org_id: number | bigint'
        )
        assert 'stmt.get(...updateValues, user_id, org_id)' in code
        assert 'const primaryKey: string[] = ["user_id", "org_id"];' in code

    def test_insert_defaults(self, users_schema):
        code = generate_from_schema(users_schema, language='typescript').units['users'].code
        assert '"INSERT INTO \\"users\\" DEFAULT VALUES RETURNING *"' in code

    def test_index(self, full_schema):
        index = generate_from_schema(full_schema, language='typescript').manifest.code
        assert index.splitlines()[1:] == [
            'export * from "./users";',
            'export * from "./memberships";',
            'export * from "./events";',
        ]

    def test_custom_db_import_and_int_type(self, users_schema):
        code = generate_from_schema(
            users_schema,
            language='typescript',
            config={'db_import': 'bun:sqlite3', 'int_type': 'number'},
        ).units['users'].code
        assert 'from "bun:sqlite3";' in code
        assert '    id: number;' in code

    def test_no_comments(self, users_schema):
        code = generate_from_schema(
            users_schema, language='typescript', config={'add_comments': False}
        ).units['users'].code
        assert '/**' not in code

    def test_quoted_property(self):
        code = generate_from_schema(
            'CREATE TABLE t ("first name" TEXT, "default" INTEGER PRIMARY KEY);',
            language='typescript',
        ).units['t'].code
        assert '    "first name": string | null;' in code
        assert _signature(code, 'getT') == 'db: Database, default_: number | bigint'

    def test_idempotent(self, full_schema):
        first = generate_from_schema(full_schema, language='typescript')
        second = generate_from_schema(full_schema, language='typescript')
        assert [u.code for u in first.files] == [u.code for u in second.files]


class TestGeneratedColumns:

    def test_generated_columns_read_but_not_written(self):
        schema = 'CREATE TABLE t (id INTEGER PRIMARY KEY, a INTEGER, b INTEGER AS (a * 2));'
        code = generate_from_schema(schema, language='typescript').units['t'].code
        assert '    b: number | bigint | null;' in code
        assert 'const columns: string[] = ["id", "a"];' in code


class TestFileNames:

    @pytest.mark.parametrize(('table', 'file_name'), [
        ('../x', '_._x.ts'),
        ('a/b', 'a_b.ts'),
        ('.hidden', '_hidden.ts'),
    ])
    def test_path_characters_replaced(self, table, file_name):
        result = generate_from_schema(f'CREATE TABLE "{table}" (id INTEGER PRIMARY KEY);', language='ts')
        unit = result.units[table]
        assert unit.file_name == file_name
        assert f'export * from "./{file_name[:-3]}";' in result.manifest.code

    def test_written_inside_output_dir(self, tmp_path):
        out = tmp_path / 'out'
        generate_files('CREATE TABLE "../escape" (id INTEGER PRIMARY KEY);', out, language='ts')
        assert not (tmp_path / 'escape.ts').exists()
        assert (out / '_._escape.ts').is_file()


def test_shared_function_name_warns():
    schema = 'CREATE TABLE users (id INTEGER PRIMARY KEY); CREATE TABLE all_users (id INTEGER PRIMARY KEY);'
    result = generate_from_schema(schema, language='typescript')
    assert any("share the exported name 'getAllUsers'" in w for w in result.warnings)
