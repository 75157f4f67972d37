"""Tests for complete generation passes."""

import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from mprestgen.codegen.codegen import Codegen
from mprestgen.codegen.formatters import Formatter
from mprestgen.config import DocumentConfig
from mprestgen.exceptions import ConfigurationError, FormattingError, SchemaLoadError

from .fixtures import PETSTORE_SPEC, SWAGGER_2_SPEC, get_spec_as_yaml


class MarkingFormatter(Formatter):
    """Prefixes sources with a marker; fails for sources containing a token."""

    def __init__(self, fail_on: str | None = None, available: bool = True):
        self.fail_on = fail_on
        self.available = available
        self.formatted = []

    def format(self, code: str) -> str:
        if self.fail_on and self.fail_on in code:
            raise FormattingError('unexpected token')
        self.formatted.append(code)
        return '// formatted\n' + code

    def is_available(self) -> bool:
        return self.available


@pytest.fixture
def spec_file(tmp_path):
    path = tmp_path / 'petstore.yaml'
    path.write_text(get_spec_as_yaml(PETSTORE_SPEC))
    return path


def make_config(spec_file, tmp_path, **options) -> DocumentConfig:
    return DocumentConfig(
        source=str(spec_file),
        output=str(tmp_path / 'out'),
        api_package='com.example.api',
        model_package='com.example.model',
        options=options,
    )


class TestGenerate:
    """Tests for Codegen.generate."""

    def test_writes_interfaces_and_models(self, spec_file, tmp_path):
        """Interfaces and models land in their package directories."""
        result = Codegen(
            make_config(spec_file, tmp_path, formatter=False)
        ).generate()

        out = tmp_path / 'out' / 'com' / 'example'
        names = sorted(Path(p).relative_to(out).as_posix() for p in result.files)
        assert names == [
            'api/DefaultApi.java',
            'api/PetsApi.java',
            'api/StoreApi.java',
            'model/NewPet.java',
            'model/Pet.java',
            'model/PetStatus.java',
        ]
        pets_api = (out / 'api' / 'PetsApi.java').read_text()
        assert pets_api.startswith('package com.example.api;')
        assert 'import com.example.model.NewPet;' in pets_api
        assert result.format_results == []

    def test_groups_are_returned(self, spec_file, tmp_path):
        """The result exposes the operations by group."""
        result = Codegen(make_config(spec_file, tmp_path, formatter=False)).generate()

        assert list(result.groups) == ['default', 'pets', 'store']
        assert sum(len(ops) for ops in result.groups.values()) == 6

    def test_fixed_api_name_writes_one_interface(self, spec_file, tmp_path):
        """A fixed name produces a single interface file."""
        result = Codegen(
            make_config(spec_file, tmp_path, apiName='PetStoreClient', formatter=False)
        ).generate()

        interfaces = [p for p in result.files if '/api/' in Path(p).as_posix()]
        assert [Path(p).name for p in interfaces] == ['PetStoreClient.java']

    def test_models_can_be_disabled(self, spec_file, tmp_path):
        """generate_models=False writes interfaces only."""
        config = make_config(spec_file, tmp_path, formatter=False)
        config.generate_models = False

        result = Codegen(config).generate()

        assert all('/model/' not in Path(p).as_posix() for p in result.files)

    def test_policy_from_options(self, spec_file, tmp_path):
        """The option bag is resolved once into the pass policy."""
        codegen = Codegen(make_config(spec_file, tmp_path, fieldGen='lombok'))

        assert codegen.policy.lombok_data

    def test_missing_source(self, tmp_path):
        """A missing document raises SchemaLoadError."""
        config = DocumentConfig(
            source=str(tmp_path / 'missing.yaml'), output=str(tmp_path / 'out')
        )

        with pytest.raises(SchemaLoadError):
            Codegen(config).generate()

    def test_custom_schema_loader(self, tmp_path):
        """An injected loader replaces file access."""
        from mprestgen.codegen.schema_loader import SchemaLoader

        loader = MagicMock()
        loader.load.return_value = SchemaLoader().parse(
            {'openapi': '3.0.3', 'info': {'title': 'Empty', 'version': '0'}, 'paths': {}}
        )
        config = DocumentConfig(source='memory', output=str(tmp_path / 'out'))

        result = Codegen(config, schema_loader=loader).generate()

        loader.load.assert_called_once_with('memory')
        assert result.files == []

    def test_free_form_operation_id(self, tmp_path):
        """Operation ids with punctuation still give a compilable bean class."""
        query = [
            {'name': name, 'in': 'query', 'schema': {'type': 'string'}}
            for name in ('q', 'tag', 'page', 'size')
        ]
        document = {
            'openapi': '3.0.3',
            'info': {'title': 'Search', 'version': '1'},
            'paths': {
                '/pets/search': {
                    'get': {
                        'operationId': 'pets:search',
                        'parameters': query,
                        'responses': {'200': {'description': 'OK'}},
                    }
                }
            },
        }
        spec_file = tmp_path / 'search.yaml'
        spec_file.write_text(get_spec_as_yaml(document))

        Codegen(
            make_config(spec_file, tmp_path, beanParamCount=2, formatter=False)
        ).generate()

        source = (
            tmp_path / 'out' / 'com' / 'example' / 'api' / 'PetsApi.java'
        ).read_text()
        assert 'public static class PetsSearchBeanParam {' in source
        assert '@BeanParam PetsSearchBeanParam ' in source

    def test_swagger_2_document(self, tmp_path):
        """A Swagger 2.0 document is upgraded and generated."""
        spec_file = tmp_path / 'swagger.yaml'
        spec_file.write_text(get_spec_as_yaml(SWAGGER_2_SPEC))

        result = Codegen(make_config(spec_file, tmp_path, formatter=False)).generate()

        assert sorted(Path(p).name for p in result.files) == ['Pet.java', 'PetsApi.java']
        source = (
            tmp_path / 'out' / 'com' / 'example' / 'api' / 'PetsApi.java'
        ).read_text()
        assert 'listPets(' in source
        assert 'uploadPhoto(' in source
        assert 'multipart/form-data' in source

    def test_template_dir_overrides_builtin(self, spec_file, tmp_path):
        """Templates in template_dir replace the built-in ones by name."""
        templates = tmp_path / 'templates'
        templates.mkdir()
        (templates / 'api.java.jinja2').write_text(
            'package {{ package }};\n\n// custom\npublic interface {{ class_name }} {}\n'
        )
        config = make_config(spec_file, tmp_path, formatter=False)
        config.template_dir = str(templates)

        Codegen(config).generate()

        out = tmp_path / 'out' / 'com' / 'example'
        assert (out / 'api' / 'PetsApi.java').read_text() == (
            'package com.example.api;\n\n// custom\npublic interface PetsApi {}\n'
        )
        assert 'public class Pet' in (out / 'model' / 'Pet.java').read_text()

    def test_missing_template_dir(self, spec_file, tmp_path):
        """A template_dir that does not exist is a configuration error."""
        config = make_config(spec_file, tmp_path)
        config.template_dir = str(tmp_path / 'nope')

        with pytest.raises(ConfigurationError, match='nope'):
            Codegen(config)


class TestFormattingSweep:
    """Tests for the sweep at the end of a pass."""

    def test_every_written_file_is_formatted(self, spec_file, tmp_path):
        """The sweep formats each file after all files are written."""
        formatter = MarkingFormatter()
        result = Codegen(
            make_config(spec_file, tmp_path), formatter=formatter
        ).generate()

        assert [r.path for r in result.format_results] == result.files
        assert all(r.ok for r in result.format_results)
        for path in result.files:
            assert Path(path).read_text().startswith('// formatted\n')

    def test_formatter_off_leaves_files(self, spec_file, tmp_path):
        """No file is passed to the formatter when formatting is off."""
        formatter = MarkingFormatter()
        result = Codegen(
            make_config(spec_file, tmp_path, formatter='false'), formatter=formatter
        ).generate()

        assert formatter.formatted == []
        assert result.format_results == []
        for path in result.files:
            assert not Path(path).read_text().startswith('// formatted')

    def test_failure_keeps_original_and_run_completes(
        self, spec_file, tmp_path, caplog
    ):
        """One unformattable file is logged once and left as rendered."""
        formatter = MarkingFormatter(fail_on='public enum PetStatus')

        with caplog.at_level(logging.ERROR):
            result = Codegen(
                make_config(spec_file, tmp_path), formatter=formatter
            ).generate()

        (failed,) = result.failed_files
        assert failed.endswith('PetStatus.java')
        assert Path(failed).read_text().startswith('package com.example.model;')
        assert len(result.format_results) == len(result.files)

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert failed in errors[0].getMessage()

    def test_unavailable_formatter(self, spec_file, tmp_path):
        """Without the formatter binary files are reported as skipped."""
        result = Codegen(
            make_config(spec_file, tmp_path),
            formatter=MarkingFormatter(available=False),
        ).generate()

        assert {r.status for r in result.format_results} == {'skipped'}
        assert result.failed_files == []
