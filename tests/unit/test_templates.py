"""Unit tests for the Jinja2 template wrapper."""
import pytest

from sqlite_codegen.codegen.core.templates import TemplateError, create_template_engine


@pytest.fixture
def render(tmp_path):
    """Render an inline template through a file-backed engine."""
    def render(source, **context):
        (tmp_path / 'inline.j2').write_text(source, encoding='utf-8')
        return create_template_engine(tmp_path).render_template('inline.j2', context)
    return render


class TestFilters:

    @pytest.mark.parametrize(('value', 'expected'), [
        ('users', "'users'"),
        ('SELECT * FROM "users"', '\'SELECT * FROM "users"\''),
        ("it's", '"it\'s"'),
    ])
    def test_python_string(self, render, value, expected):
        assert render('{{ v | pystr }}', v=value) == expected

    def test_js_string(self, render):
        rendered = render('{{ v | jsstr }}', v='DELETE FROM "t"')
        assert rendered == '"DELETE FROM \\"t\\""'

    def test_comment(self, render):
        assert render('{{ v | comment("//") }}', v='one\n\ntwo') == '// one\n//\n// two'

    def test_comment_defaults_to_hash(self, render):
        assert render('{{ v | comment }}', v='Do not edit') == '# Do not edit'


class TestRendering:

    def test_undefined_variables_fail(self, render):
        with pytest.raises(TemplateError):
            render('{{ missing }}')

    def test_missing_template_fails(self, tmp_path):
        with pytest.raises(TemplateError):
            create_template_engine(tmp_path).render_template('nope.j2', {})

    def test_engine_without_directory_has_no_templates(self):
        with pytest.raises(TemplateError):
            create_template_engine().render_template('table.py.j2', {})

    def test_block_tags_leave_no_blank_lines(self, render):
        source = '{% for x in xs %}\n{{ x }}\n{% endfor %}\n'
        assert render(source, xs=['a', 'b']) == 'a\nb\n'
