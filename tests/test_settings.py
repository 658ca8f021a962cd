"""Tests for configuration loading."""

import json
import os

import pytest
import yaml

from pagewright_pkg.models import SiteConfig
from pagewright_pkg.settings import PagewrightSettings


class TestPagewrightSettings:
    """Test cases for PagewrightSettings."""

    def test_defaults_without_config_file(self, temp_dir):
        settings = PagewrightSettings(temp_dir).load_settings()
        assert settings['posts_per_page'] == 5
        assert settings['content'] == 'content/blog'
        assert settings['output'] == 'public'

    def test_yaml_config_overrides_defaults(self, temp_dir):
        with open(os.path.join(temp_dir, 'pagewright.yml'), 'w') as f:
            yaml.safe_dump({'posts_per_page': 10, 'site_url': 'https://example.com'}, f)
        loader = PagewrightSettings(temp_dir)
        settings = loader.load_settings()

        assert settings['posts_per_page'] == 10
        assert settings['site_url'] == 'https://example.com'
        assert loader.config_file_path.endswith('pagewright.yml')

    def test_json_config(self, temp_dir):
        with open(os.path.join(temp_dir, 'pagewright.json'), 'w') as f:
            json.dump({'content': 'posts'}, f)
        assert PagewrightSettings(temp_dir).load_settings()['content'] == 'posts'

    def test_yml_preferred_over_json(self, temp_dir):
        with open(os.path.join(temp_dir, 'pagewright.yml'), 'w') as f:
            f.write('posts_per_page: 3\n')
        with open(os.path.join(temp_dir, 'pagewright.json'), 'w') as f:
            json.dump({'posts_per_page': 7}, f)
        assert PagewrightSettings(temp_dir).load_settings()['posts_per_page'] == 3

    def test_invalid_yaml(self, temp_dir):
        with open(os.path.join(temp_dir, 'pagewright.yml'), 'w') as f:
            f.write('posts_per_page: [1\n')
        with pytest.raises(ValueError, match="Invalid YAML"):
            PagewrightSettings(temp_dir).load_settings()

    def test_unknown_key(self, temp_dir):
        with open(os.path.join(temp_dir, 'pagewright.yml'), 'w') as f:
            f.write('page_size: 3\n')
        with pytest.raises(ValueError, match="page_size"):
            PagewrightSettings(temp_dir).load_settings()

    def test_merge_with_args(self, temp_dir):
        loader = PagewrightSettings(temp_dir)
        loader.load_settings()
        merged = loader.merge_with_args({'posts_per_page': 2, 'output': None, 'init': None, 'log_dir': 'x'})

        assert merged['posts_per_page'] == 2
        assert merged['output'] == 'public'
        assert 'log_dir' not in merged

    @pytest.mark.parametrize('file_format', ['yml', 'json'])
    def test_sample_config_round_trips(self, temp_dir, file_format):
        loader = PagewrightSettings(temp_dir)
        path = loader.create_sample_config(file_format)

        assert os.path.basename(path) == f'pagewright.{file_format}'
        settings = PagewrightSettings(temp_dir).load_settings()
        assert settings['site_url'] == 'https://example.com'
        assert settings['posts_per_page'] == 5

    def test_sample_config_rejects_unknown_format(self, temp_dir):
        with pytest.raises(ValueError):
            PagewrightSettings(temp_dir).create_sample_config('toml')
        assert os.listdir(temp_dir) == []


class TestSiteConfig:

    def test_from_settings(self):
        config = SiteConfig.from_settings({
            'content': 'c', 'output': 'o', 'posts_per_page': '3',
            'site_url': 'https://example.com/', 'redirect_pages': False,
        })
        assert config.content_dir == 'c'
        assert config.output_dir == 'o'
        assert config.posts_per_page == 3
        assert config.site_url == 'https://example.com'
        assert config.redirect_pages is False
        assert config.feed_limit == 20

    @pytest.mark.parametrize('key', ['posts_per_page', 'feed_limit', 'content', 'output', 'redirect_pages'])
    def test_empty_value_rejected(self, temp_dir, key):
        """Test a key left blank in the config file is an error, not a crash later on."""
        with open(os.path.join(temp_dir, 'pagewright.yml'), 'w') as f:
            f.write(f'{key}:\n')
        with pytest.raises(ValueError, match=key):
            PagewrightSettings(temp_dir).load_settings()

    def test_empty_optional_value_allowed(self, temp_dir):
        with open(os.path.join(temp_dir, 'pagewright.yml'), 'w') as f:
            f.write('site_url:\n')
        assert PagewrightSettings(temp_dir).load_settings()['site_url'] is None

    @pytest.mark.parametrize('settings', [
        {'posts_per_page': None},
        {'posts_per_page': 'five'},
        {'posts_per_page': True},
        {'feed_limit': None},
        {'content': None},
        {'output': 42},
    ])
    def test_from_settings_rejects_bad_values(self, settings):
        with pytest.raises(ValueError, match=next(iter(settings))):
            SiteConfig.from_settings(settings)

    @pytest.mark.parametrize('value', ['false', 'true', 0, 1, None])
    def test_redirect_pages_must_be_boolean(self, value):
        with pytest.raises(ValueError, match='redirect_pages'):
            SiteConfig.from_settings({'redirect_pages': value})
