"""
Build orchestration: load posts, plan pages and redirects, then publish.

A build runs in a single pass. Every output file is first written to a staging
directory beside the output directory; only once all of them exist are they
moved into place, so a failed build publishes nothing.
"""

import os
import json
import shutil
import logging
import tempfile
import time
from datetime import datetime

from .content import ContentLoader
from .feeds import generate_rss_feed, generate_xml_sitemap
from .models import BuildResult
from .paths import output_file_for
from .planner import PagePlan
from .redirects import RedirectPageRenderer, build_redirects

MANIFEST_FILE = '.pagewright-manifest.json'


class InfoFilter(logging.Filter):
    """Filter to allow only selected INFO messages to be shown in the console."""
    def filter(self, record):
        if record.levelno >= logging.WARNING:
            return True
        allowed_messages = [
            "Site build completed in",
            "Total posts loaded:",
            "Total routes planned:",
            "Total redirects:",
            "Writing route table",
            "Writing redirect table",
            "Generating RSS feed",
            "Generating XML sitemap",
            "Published",
        ]
        return any(msg in record.getMessage() for msg in allowed_messages)


class Pagewright:
    """Plan and publish the route and redirect tables for a blog."""

    def __init__(self, config, log_dir=None):
        if config.posts_per_page < 1:
            raise ValueError(f"posts_per_page must be at least 1, got {config.posts_per_page}")
        self.config = config
        self.content_dir = config.content_dir
        self.output_dir = config.output_dir
        self.log_dir = log_dir or os.path.join(os.getcwd(), 'logs')
        self.setup_logging()
        self.loader = ContentLoader(self.content_dir)
        self.posts_loaded = 0
        self.routes_planned = 0
        self.redirects_built = 0

    def setup_logging(self):
        """Set up logging configuration."""
        self.logger = logging.getLogger('Pagewright')
        self.logger.setLevel(logging.DEBUG)

        if not self.logger.handlers:
            # Console handler with filter
            console_handler = logging.StreamHandler()
            console_handler.setLevel(logging.INFO)
            console_handler.addFilter(InfoFilter())
            console_handler.setFormatter(logging.Formatter('%(message)s'))
            self.logger.addHandler(console_handler)

            # File handler for all logs
            os.makedirs(self.log_dir, exist_ok=True)
            log_filename = datetime.now().strftime('pagewright_%Y-%m-%d_%H-%M-%S.log')
            file_handler = logging.FileHandler(os.path.join(self.log_dir, log_filename))
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
            self.logger.addHandler(file_handler)

    def plan(self):
        """
        Load the posts and plan their pages and redirects.

        Returns:
            Tuple of (PagePlan, list of RedirectRule)
        """
        posts = self.loader.load()
        plan = PagePlan(posts, self.config.posts_per_page)
        redirects = build_redirects(plan.posts)
        self.posts_loaded = len(plan.posts)
        return plan, redirects

    def write_file(self, root, relative_path, text):
        path = os.path.join(root, relative_path)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(text)
        self.logger.debug(f"Wrote {relative_path}")
        return relative_path

    def write_outputs(self, staging_dir, plan, routes, redirects):
        """Write every output file under staging_dir and return their relative paths."""
        written = []

        self.logger.info("Writing route table")
        written.append(self.write_file(
            staging_dir, 'routes.json',
            json.dumps([route.to_dict() for route in routes], indent=2)))

        self.logger.info("Writing redirect table")
        written.append(self.write_file(
            staging_dir, 'redirects.json',
            json.dumps([rule.to_dict() for rule in redirects], indent=2)))

        if self.config.redirect_pages:
            renderer = RedirectPageRenderer(self.config.site_url)
            route_files = {output_file_for(route.path, '') for route in routes}
            for rule in redirects:
                stub = output_file_for(rule.from_path, '')
                if stub in route_files:
                    self.logger.warning(f"Skipping redirect page for {rule.from_path}: path is already a route")
                    continue
                written.append(self.write_file(staging_dir, stub, renderer.render(rule)))

        if self.config.site_url:
            site_title = self.config.site_title or self.config.site_url
            self.logger.info("Generating RSS feed")
            written.append(self.write_file(staging_dir, 'rss.xml', generate_rss_feed(
                plan.posts, self.config.site_url, site_title,
                self.config.site_description, self.config.feed_limit)))
            self.logger.info("Generating XML sitemap")
            written.append(self.write_file(
                staging_dir, 'sitemap.xml', generate_xml_sitemap(plan, self.config.site_url)))
        else:
            self.logger.info("Skipping RSS feed and XML sitemap (no site_url).")

        return written

    def read_manifest(self):
        manifest_path = os.path.join(self.output_dir, MANIFEST_FILE)
        if not os.path.exists(manifest_path):
            return []
        try:
            with open(manifest_path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (IOError, OSError, json.JSONDecodeError) as e:
            self.logger.warning(f"Ignoring unreadable manifest {manifest_path}: {e}")
            return []

    def publish(self, staging_dir, written):
        """
        Move staged files into the output directory.

        Files being replaced are first set aside under the staging directory. If any
        move fails, the new files are removed and the set-aside files are put back,
        so the output directory still holds the previous build.
        """
        os.makedirs(self.output_dir, exist_ok=True)
        previous = self.read_manifest()

        self.write_file(staging_dir, MANIFEST_FILE, json.dumps(sorted(written), indent=2))
        to_publish = list(written) + [MANIFEST_FILE]

        backup_dir = tempfile.mkdtemp(prefix='backup-', dir=staging_dir)
        placed = []
        try:
            for relative_path in to_publish:
                destination = os.path.join(self.output_dir, relative_path)
                backup = None
                if os.path.isfile(destination):
                    backup = os.path.join(backup_dir, relative_path)
                    os.makedirs(os.path.dirname(backup), exist_ok=True)
                    os.replace(destination, backup)
                placed.append((destination, backup))
                os.makedirs(os.path.dirname(destination), exist_ok=True)
                shutil.move(os.path.join(staging_dir, relative_path), destination)
        except Exception:
            self.logger.error("Publishing failed, restoring the previous output")
            self.rollback(placed)
            raise

        current = set(written)
        for relative_path in previous:
            if relative_path in current or os.path.isabs(relative_path) or ".." in relative_path.split(os.sep):
                continue
            stale = os.path.join(self.output_dir, relative_path)
            if os.path.isfile(stale):
                os.remove(stale)
                self.prune_empty_dirs(os.path.dirname(stale))
                self.logger.debug(f"Removed stale file {relative_path}")

        self.logger.info(f"Published {len(written)} files to {self.output_dir}")

    def rollback(self, placed):
        """Undo a partial publish, newest move first."""
        for destination, backup in reversed(placed):
            if os.path.isfile(destination):
                os.remove(destination)
            if backup is not None:
                os.replace(backup, destination)
            else:
                self.prune_empty_dirs(os.path.dirname(destination))

    def prune_empty_dirs(self, directory):
        """Remove `directory` and its parents while they are empty, stopping at the output directory."""
        output_root = os.path.abspath(self.output_dir)
        directory = os.path.abspath(directory)
        while directory != output_root and directory.startswith(output_root + os.sep):
            if os.listdir(directory):
                break
            os.rmdir(directory)
            directory = os.path.dirname(directory)

    def build(self):
        """
        Main build process.

        Returns:
            BuildResult describing the published routes, redirects and files

        Raises:
            PagewrightError: if any post fails to load; nothing is published
        """
        start_time = time.time()
        self.logger.info("Starting site build...")

        plan, redirects = self.plan()
        routes = plan.routes()
        self.routes_planned = len(routes)
        self.redirects_built = len(redirects)

        output_parent = os.path.dirname(os.path.abspath(self.output_dir))
        os.makedirs(output_parent, exist_ok=True)
        staging_dir = tempfile.mkdtemp(prefix='.pagewright-', dir=output_parent)
        try:
            written = self.write_outputs(staging_dir, plan, routes, redirects)
            self.publish(staging_dir, written)
        finally:
            shutil.rmtree(staging_dir, ignore_errors=True)

        elapsed = time.time() - start_time
        self.logger.info(f"Site build completed in {elapsed:.6f} seconds.")
        self.logger.info(f"Total posts loaded: {self.posts_loaded}")
        self.logger.info(f"Total routes planned: {self.routes_planned}")
        self.logger.info(f"Total redirects: {self.redirects_built}")

        return BuildResult(
            routes=tuple(routes),
            redirects=tuple(redirects),
            files=tuple(written),
            elapsed=elapsed,
        )
