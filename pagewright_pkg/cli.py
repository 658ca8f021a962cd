#!/usr/bin/env python3
"""
Command-line interface for Pagewright.
"""

import sys
import argparse

from . import __version__
from .core import Pagewright
from .errors import PagewrightError
from .models import SiteConfig
from .settings import PagewrightSettings


def build_parser():
    parser = argparse.ArgumentParser(description='Pagewright - blog page and redirect planner')
    parser.add_argument('--content', type=str,
                        help='Content directory containing markdown posts')
    parser.add_argument('--output', type=str,
                        help='Output directory for the route and redirect tables')
    parser.add_argument('--posts-per-page', type=int,
                        help='Number of posts per index page')
    parser.add_argument('--site-url', type=str,
                        help='Site URL for redirects, RSS feed and sitemap')
    parser.add_argument('--site-title', type=str, help='Site title for the RSS feed')
    parser.add_argument('--site-description', type=str, help='Site description for the RSS feed')
    parser.add_argument('--no-redirect-pages', dest='redirect_pages', action='store_false', default=None,
                        help='Do not write HTML redirect pages at legacy slug paths')
    parser.add_argument('--log-dir', type=str,
                        help='Directory for build logs (default: ./logs)')
    parser.add_argument('--init', type=str, choices=['yml', 'yaml', 'json'],
                        help='Create a sample configuration file')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.init:
        config_path = PagewrightSettings().create_sample_config(args.init)
        print(f"Created sample configuration file: {config_path}")
        return 0

    try:
        settings_loader = PagewrightSettings()
        settings_loader.load_settings()

        # Command line arguments take precedence over the config file
        args_dict = {k: v for k, v in vars(args).items() if v is not None}
        final_settings = settings_loader.merge_with_args(args_dict)

        generator = Pagewright(SiteConfig.from_settings(final_settings), log_dir=args.log_dir)
        generator.build()
    except (PagewrightError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
