"""Folder profiling: git state, framework markers and metadata presence."""

from __future__ import annotations

import logging
import os

from attention_editor.core.errors import FolderError, NotFoundError
from attention_editor.core.paths import FolderRoot, as_root
from attention_editor.core.ports.vcs import VcsFactsProvider
from attention_editor.models import (
    FolderProfile,
    FrameworkProfile,
    GitProfile,
    JavaScriptProfile,
    MetadataProfile,
    RubyProfile,
    RustProfile,
    TypeScriptProfile,
)
from attention_editor.storage.dump import DUMP_FILE_NAME
from attention_editor.storage.ini_directory import AS_DIRECTORY_NAME

logger = logging.getLogger(__name__)

RAILS_APPLICATION_MARKER = "Rails::Application"


def analyze_git_profile(root: FolderRoot, provider: VcsFactsProvider | None = None) -> GitProfile:
    if not root.join(".git").is_dir():
        return GitProfile()

    if provider is None:
        from attention_editor.vcs.git import GitCliFactsProvider

        provider = GitCliFactsProvider()

    try:
        facts = provider.facts(root.path)
    except FolderError as exc:
        logger.warning("Git analysis failed for %s: %s", root, exc)
        return GitProfile()
    except Exception:
        logger.exception("Git analysis failed for %s", root)
        return GitProfile()

    return GitProfile(
        has_git=True,
        has_branches=bool(facts.branches),
        has_commits=facts.commit_count > 0,
        branches=list(facts.branches),
        current_branch=facts.current_branch,
        commit_count=facts.commit_count,
    )


def _is_rails_app(root: FolderRoot) -> bool:
    config_application = root.join("config", "application.rb")
    if not config_application.is_file():
        return False
    try:
        content = config_application.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.warning("Cannot read %s: %s", config_application, exc)
        return False
    return RAILS_APPLICATION_MARKER in content


def analyze_ruby(root: FolderRoot) -> RubyProfile:
    gemspec_exists = any(root.path.glob("*.gemspec"))
    return RubyProfile(
        is_gem=gemspec_exists,
        is_rails_app=_is_rails_app(root),
        gemfile_exists=root.join("Gemfile").exists(),
        gemspec_exists=gemspec_exists,
    )


def analyze_typescript(root: FolderRoot) -> TypeScriptProfile:
    tsconfig_exists = root.join("tsconfig.json").exists()
    return TypeScriptProfile(has_typescript=tsconfig_exists, tsconfig_exists=tsconfig_exists)


def analyze_javascript(root: FolderRoot) -> JavaScriptProfile:
    package_json_exists = root.join("package.json").exists()
    return JavaScriptProfile(
        has_javascript=package_json_exists,
        package_json_exists=package_json_exists,
        node_modules_exists=root.join("node_modules").is_dir(),
    )


def analyze_rust(root: FolderRoot) -> RustProfile:
    cargo_toml_exists = root.join("Cargo.toml").exists()
    return RustProfile(has_rust=cargo_toml_exists, cargo_toml_exists=cargo_toml_exists)


def analyze_framework_profile(root: FolderRoot) -> FrameworkProfile:
    return FrameworkProfile(
        ruby=analyze_ruby(root),
        typescript=analyze_typescript(root),
        javascript=analyze_javascript(root),
        rust=analyze_rust(root),
    )


def analyze_metadata_profile(root: FolderRoot) -> MetadataProfile:
    as_directory = root.join(AS_DIRECTORY_NAME)
    dump_file = root.join(DUMP_FILE_NAME)
    has_as_directory = as_directory.is_dir()
    has_dump = dump_file.exists()
    return MetadataProfile(
        has_metadata=has_as_directory,
        has_metadata_dump=has_dump,
        as_directory_path=str(as_directory) if has_as_directory else None,
        dump_file_path=str(dump_file) if has_dump else None,
    )


def analyze_folder(
    root: FolderRoot | str | os.PathLike[str],
    provider: VcsFactsProvider | None = None,
) -> FolderProfile:
    """Take a point-in-time profile of *root*."""
    folder = as_root(root)
    if not folder.is_dir():
        raise NotFoundError(f"Not a directory: {folder}")

    return FolderProfile(
        git_profile=analyze_git_profile(folder, provider),
        framework_profile=analyze_framework_profile(folder),
        metadata_profile=analyze_metadata_profile(folder),
    )
