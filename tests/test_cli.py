"""Tests for CLI functionality."""

import argparse
import json
from unittest.mock import Mock, patch, AsyncMock

import pytest
import yaml

from rwanda_cinema.cli.cli_main import RwandaCinemaCLI
from rwanda_cinema.cli.commands.serve_command import ServeCommand
from rwanda_cinema.cli.commands.sitemap_command import SitemapCommand
from rwanda_cinema.cli.commands.videos_command import VideosCommand
from tests.fixtures.mock_data import MockDataGenerator


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text(yaml.safe_dump({
        'github': {'repository': 'owner/translated', 'token': 'test-token'},
        'sitemap': {'repository': 'owner/films'},
    }))
    return path


@pytest.fixture(autouse=True)
def quiet_logging():
    with patch('rwanda_cinema.cli.cli_main.setup_application_logging'):
        yield


@pytest.fixture
def catalog_source():
    source = Mock()
    source.load_videos = AsyncMock(return_value=MockDataGenerator.video_batch(6))
    source.load_sitemap_entries = AsyncMock(return_value=MockDataGenerator.sitemap_entries(3))
    return source


class TestRwandaCinemaCLI:
    """Test cases for the main CLI class."""

    def test_cli_initialization(self):
        cli = RwandaCinemaCLI()

        assert set(cli.commands) == {'serve', 'videos', 'sitemap'}

    def test_parser_creation(self):
        parser = RwandaCinemaCLI().create_parser()

        assert parser.prog == 'rwanda-cinema'
        args = parser.parse_args(['--json', 'videos', '--type', 'MOVIE', '--limit', '3'])
        assert args.json
        assert args.command == 'videos'
        assert args.content_type == 'MOVIE'
        assert args.limit == 3

    @pytest.mark.asyncio
    async def test_run_with_no_command(self):
        cli = RwandaCinemaCLI()

        with patch('builtins.print'):
            assert await cli.run([]) == 0

    @pytest.mark.asyncio
    async def test_failed_result_sets_exit_code(self, config_file):
        cli = RwandaCinemaCLI()

        # No base URL configured
        assert await cli.run(['--config', str(config_file), 'sitemap']) == 1

    @pytest.mark.asyncio
    async def test_exception_sets_exit_code(self, tmp_path):
        broken = tmp_path / 'config.yaml'
        broken.write_text(yaml.safe_dump({'github': {'repository': 'not a repo'}}))
        cli = RwandaCinemaCLI()

        assert await cli.run(['--config', str(broken), 'videos']) == 1

    @pytest.mark.asyncio
    async def test_json_result(self, config_file, catalog_source, capsys):
        cli = RwandaCinemaCLI()

        with patch('rwanda_cinema.cli.commands.videos_command.CatalogSource', return_value=catalog_source):
            exit_code = await cli.run(['--config', str(config_file), '--json', 'videos', '--format', 'json'])

        assert exit_code == 0
        output = capsys.readouterr().out
        assert '"shown": 6' in output


class TestVideosCommand:
    """Test cases for the videos command."""

    def test_properties(self):
        command = VideosCommand()

        assert command.name == 'videos'
        assert command.description

    def _args(self, **overrides):
        values = dict(search='', translator='', content_type='', limit=None, format='list')
        values.update(overrides)
        return argparse.Namespace(**values)

    @pytest.mark.asyncio
    async def test_list_output(self, catalog_source, capsys):
        config_manager = Mock()
        config_manager.get_config.return_value = MockDataGenerator.create_mock_config()

        with patch('rwanda_cinema.cli.commands.videos_command.CatalogSource', return_value=catalog_source):
            result = await VideosCommand().execute(self._args(content_type='tv-series'), config_manager)

        lines = capsys.readouterr().out.strip().splitlines()
        assert result['success']
        assert result['shown'] == 3
        assert result['total'] == 6
        assert len(lines) == 3
        assert lines[0].startswith('The Dark Knight 1 [TV-SERIES, Junior Giti')

    @pytest.mark.asyncio
    async def test_json_output_with_limit(self, catalog_source, capsys):
        config_manager = Mock()
        config_manager.get_config.return_value = MockDataGenerator.create_mock_config()

        with patch('rwanda_cinema.cli.commands.videos_command.CatalogSource', return_value=catalog_source):
            result = await VideosCommand().execute(self._args(format='json', limit=2), config_manager)

        data = json.loads(capsys.readouterr().out)
        assert result['shown'] == 2
        assert [item['slug'] for item in data] == ['spider-man-0', 'the-dark-knight-1']
        assert data[0]['contentType'] == 'MOVIE'


class TestSitemapCommand:
    """Test cases for the sitemap command."""

    def _args(self, **overrides):
        values = dict(kind='main', number=1, base_url='https://rwandacinema.com', output=None)
        values.update(overrides)
        return argparse.Namespace(**values)

    @pytest.fixture
    def config_manager(self):
        manager = Mock()
        manager.get_config.return_value = MockDataGenerator.create_mock_config()
        return manager

    @pytest.mark.asyncio
    async def test_static_sitemap_needs_no_network(self, config_manager, capsys):
        with patch('rwanda_cinema.cli.commands.sitemap_command.CatalogSource') as source_class:
            result = await SitemapCommand().execute(self._args(kind='static'), config_manager)

        assert result['success']
        source_class.assert_not_called()
        assert '<loc>https://rwandacinema.com/about</loc>' in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_main_sitemap_to_file(self, config_manager, catalog_source, tmp_path):
        output = tmp_path / 'out' / 'sitemap.xml'

        with patch('rwanda_cinema.cli.commands.sitemap_command.CatalogSource', return_value=catalog_source):
            result = await SitemapCommand().execute(self._args(output=output), config_manager)

        assert result['success']
        assert result['output'] == str(output)
        assert '<loc>https://rwandacinema.com/drama/video-0</loc>' in output.read_text(encoding='utf-8')

    @pytest.mark.asyncio
    async def test_missing_chunk(self, config_manager, catalog_source):
        with patch('rwanda_cinema.cli.commands.sitemap_command.CatalogSource', return_value=catalog_source):
            result = await SitemapCommand().execute(self._args(kind='chunk', number=5), config_manager)

        assert not result['success']

    @pytest.mark.asyncio
    async def test_base_url_required(self, config_manager):
        result = await SitemapCommand().execute(self._args(base_url=None), config_manager)

        assert not result['success']


class TestServeCommand:
    """Test cases for the serve command."""

    @pytest.mark.asyncio
    async def test_command_line_overrides_config(self):
        config_manager = Mock()
        config_manager.get_config.return_value = MockDataGenerator.create_mock_config()
        args = argparse.Namespace(host=None, port=9000)

        with patch('rwanda_cinema.api_server.run_api_server') as run_server:
            result = await ServeCommand().execute(args, config_manager)

        run_server.assert_called_once_with(host='0.0.0.0', port=9000, config_manager=config_manager)
        assert result['success']
