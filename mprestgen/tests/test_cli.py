"""Test CLI functionality."""

from unittest.mock import MagicMock, patch

import pytest
import yaml
from typer.testing import CliRunner

from mprestgen.cli import app
from mprestgen.codegen.postprocess import FormatResult
from mprestgen.config import CodegenConfig, DocumentConfig
from mprestgen.exceptions import ConfigurationError, SchemaLoadError


@pytest.fixture
def runner():
    """Fixture providing CLI test runner."""
    return CliRunner()


@pytest.fixture
def sample_config():
    """Fixture providing sample configuration."""
    return CodegenConfig(
        documents=[
            DocumentConfig(
                source='https://api.example.com/openapi.json',
                output='./generated',
                options={'fieldGen': 'lombok', 'beanParamCount': 2},
            )
        ]
    )


def generation_result(files, failed=()):
    result = MagicMock()
    result.files = files
    result.failed_files = list(failed)
    result.format_results = [FormatResult(path, 'formatted') for path in files]
    return result


class TestGenerateCommand:
    """Test the generate command."""

    @patch('mprestgen.cli.get_config')
    @patch('mprestgen.cli.Codegen')
    def test_generate_without_config_file(
        self, mock_codegen_class, mock_get_config, runner, sample_config
    ):
        """Test generate command without specifying config file."""
        mock_get_config.return_value = sample_config
        mock_codegen_class.return_value.generate.return_value = generation_result(
            ['generated/api/PetsApi.java']
        )

        result = runner.invoke(app, ['generate'])

        assert result.exit_code == 0
        mock_get_config.assert_called_once_with(None)
        mock_codegen_class.assert_called_once_with(sample_config.documents[0])
        assert 'generated/api/PetsApi.java' in result.stdout
        assert 'Successfully generated code' in result.stdout

    @patch('mprestgen.cli.get_config')
    @patch('mprestgen.cli.Codegen')
    def test_generate_with_config_file(
        self, mock_codegen_class, mock_get_config, runner, sample_config
    ):
        """Test generate command with config file specified."""
        mock_get_config.return_value = sample_config
        mock_codegen_class.return_value.generate.return_value = generation_result([])

        result = runner.invoke(app, ['generate', '--config', 'custom.yaml', '-v'])

        assert result.exit_code == 0
        mock_get_config.assert_called_once_with('custom.yaml')

    @patch('mprestgen.cli.get_config')
    @patch('mprestgen.cli.Codegen')
    def test_unformatted_files_are_listed(
        self, mock_codegen_class, mock_get_config, runner, sample_config
    ):
        """Files that failed formatting are reported without failing the run."""
        mock_get_config.return_value = sample_config
        mock_codegen_class.return_value.generate.return_value = generation_result(
            ['generated/model/Pet.java'], failed=['generated/model/Pet.java']
        )

        result = runner.invoke(app, ['generate'])

        assert result.exit_code == 0
        assert 'Not formatted' in result.stdout

    @patch('mprestgen.cli.get_config')
    def test_configuration_error(self, mock_get_config, runner):
        """Configuration errors exit with code 1."""
        mock_get_config.side_effect = ConfigurationError('No configuration found')

        result = runner.invoke(app, ['generate'])

        assert result.exit_code == 1
        assert 'No configuration found' in result.stdout

    @patch('mprestgen.cli.get_config')
    @patch('mprestgen.cli.Codegen')
    def test_generation_error(
        self, mock_codegen_class, mock_get_config, runner, sample_config
    ):
        """Errors during generation exit with code 1."""
        mock_get_config.return_value = sample_config
        mock_codegen_class.return_value.generate.side_effect = SchemaLoadError(
            'https://api.example.com/openapi.json'
        )

        result = runner.invoke(app, ['generate'])

        assert result.exit_code == 1
        assert 'Failed to load schema' in result.stdout


class TestOptionsCommand:
    """Test the options command."""

    @patch('mprestgen.cli.get_config')
    def test_shows_resolved_options(self, mock_get_config, runner, sample_config):
        """The materialized option bag is printed."""
        mock_get_config.return_value = sample_config

        result = runner.invoke(app, ['options'])

        assert result.exit_code == 0
        assert 'lombokData' in result.stdout
        assert "'lombok'" in result.stdout
        assert 'beanParamCount' in result.stdout


class TestInitCommand:
    """Test the init command."""

    def test_init_writes_config(self, runner, tmp_path):
        """init writes a loadable starter file."""
        path = tmp_path / 'mprestgen.yaml'

        result = runner.invoke(app, ['init', str(path)])

        assert result.exit_code == 0
        assert yaml.safe_load(path.read_text())['documents']

    def test_init_refuses_existing(self, runner, tmp_path):
        """init never overwrites an existing file."""
        path = tmp_path / 'mprestgen.yaml'
        path.write_text('documents: []')

        result = runner.invoke(app, ['init', str(path)])

        assert result.exit_code == 1
        assert path.read_text() == 'documents: []'


class TestVersionCommand:
    """Test the version command."""

    def test_version(self, runner):
        """version prints the package version."""
        result = runner.invoke(app, ['version'])

        assert result.exit_code == 0
        assert 'mprestgen version:' in result.stdout
