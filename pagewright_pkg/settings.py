#!/usr/bin/env python3
"""
Settings loader for Pagewright.
Supports configuration from pagewright.yml, pagewright.yaml, or pagewright.json files.
"""

import os
import json
import logging
import yaml
from typing import Dict, Any, Optional


class PagewrightSettings:
    """Load and manage Pagewright configuration settings."""

    # Default configuration
    DEFAULT_SETTINGS = {
        'content': 'content/blog',
        'output': 'public',
        'posts_per_page': 5,
        'site_title': None,
        'site_description': None,
        'site_url': None,
        'author': None,
        'redirect_pages': True,
        'feed_limit': 20,
    }

    # Config file names to look for (in order of preference)
    CONFIG_FILES = ['pagewright.yml', 'pagewright.yaml', 'pagewright.json']

    def __init__(self, config_dir: str = None):
        """
        Initialize settings loader.

        Args:
            config_dir: Directory to look for config files. Defaults to current directory.
        """
        self.config_dir = config_dir or os.getcwd()
        self.settings = self.DEFAULT_SETTINGS.copy()
        self.config_file_path = None
        self.logger = logging.getLogger('Pagewright.settings')

    def load_settings(self) -> Dict[str, Any]:
        """
        Load settings from configuration file if it exists.

        Returns:
            Dictionary of configuration settings

        Raises:
            ValueError: if the config file is malformed or has unknown keys
        """
        config_file = self._find_config_file()

        if config_file:
            self.config_file_path = config_file
            loaded_settings = self._load_config_file(config_file)
            if not isinstance(loaded_settings, dict):
                raise ValueError(f"Configuration file {config_file} must contain a mapping")
            unknown = sorted(str(key) for key in set(loaded_settings) - set(self.DEFAULT_SETTINGS))
            if unknown:
                raise ValueError(f"Unknown settings in {config_file}: {', '.join(unknown)}")
            empty = sorted(key for key, value in loaded_settings.items()
                           if value is None and self.DEFAULT_SETTINGS[key] is not None)
            if empty:
                raise ValueError(f"Settings in {config_file} must not be empty: {', '.join(empty)}")
            self.settings.update(loaded_settings)
            self.logger.info(f"Loaded configuration from: {os.path.relpath(config_file)}")

        return self.settings.copy()

    def _find_config_file(self) -> Optional[str]:
        for filename in self.CONFIG_FILES:
            config_path = os.path.join(self.config_dir, filename)
            if os.path.exists(config_path):
                return config_path
        return None

    def _load_config_file(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from a file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Dictionary of configuration settings
        """
        file_ext = os.path.splitext(config_path)[1].lower()
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                if file_ext in ['.yml', '.yaml']:
                    return yaml.safe_load(f) or {}
                elif file_ext == '.json':
                    return json.load(f) or {}
                else:
                    raise ValueError(f"Unsupported config file format: {file_ext}")
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file {config_path}: {e}")
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file {config_path}: {e}")
        except PermissionError:
            raise PermissionError(f"Permission denied reading configuration file: {config_path}")
        except (IOError, OSError) as e:
            raise IOError(f"Error reading configuration file {config_path}: {e}")

    def create_sample_config(self, file_format: str = 'yml') -> str:
        """
        Create a sample configuration file.

        Args:
            file_format: Format for config file ('yml', 'yaml', or 'json')

        Returns:
            Path to created sample config file
        """
        sample_config = {
            'site_url': 'https://example.com',
            'site_title': 'My Blog',
            'site_description': 'Thoughts on programming and technology',
            'author': 'Your Name',
            'content': 'content/blog',
            'output': 'public',
            'posts_per_page': 5,
            'redirect_pages': True,
            'feed_limit': 20,
        }

        if file_format not in ['yml', 'yaml', 'json']:
            raise ValueError(f"Unsupported config file format: {file_format}")

        filename = f'pagewright.{file_format}'
        config_path = os.path.join(self.config_dir, filename)

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                if file_format in ['yml', 'yaml']:
                    # Written by hand to keep the comments
                    f.write("# Pagewright Configuration File\n\n")
                    f.write("# Site information\n")
                    f.write("site_url: https://example.com\n")
                    f.write("site_title: My Blog\n")
                    f.write("site_description: Thoughts on programming and technology\n")
                    f.write("author: Your Name\n\n")
                    f.write("# Build settings\n")
                    f.write("content: content/blog\n")
                    f.write("output: public\n\n")
                    f.write("# Index pagination\n")
                    f.write("posts_per_page: 5\n\n")
                    f.write("# Write an HTML stub at every legacy slug path\n")
                    f.write("redirect_pages: true\n\n")
                    f.write("# Number of posts in rss.xml\n")
                    f.write("feed_limit: 20\n")
                else:
                    json.dump(sample_config, f, indent=2)
        except PermissionError:
            raise PermissionError(f"Permission denied creating configuration file: {config_path}")
        except (IOError, OSError) as e:
            raise IOError(f"Error writing configuration file {config_path}: {e}")

        return config_path

    def merge_with_args(self, args_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge configuration settings with command-line arguments.
        Command-line arguments take precedence over config file settings.

        Args:
            args_dict: Dictionary of command-line arguments

        Returns:
            Merged configuration dictionary
        """
        merged = self.settings.copy()

        for key, value in args_dict.items():
            if value is not None and key in self.DEFAULT_SETTINGS:
                merged[key] = value

        return merged
