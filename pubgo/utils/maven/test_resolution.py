#!/usr/bin/env python3
"""
Tests for version classification, credential lookup and target resolution.

Run with: python3 -m pytest pubgo/utils/maven/test_resolution.py
"""

import os
import unittest
from unittest.mock import Mock, patch

from pubgo.utils.maven.credentials import Credentials, resolve_credentials
from pubgo.utils.maven.errors import MissingCredentialError
from pubgo.utils.maven.model import RepositoryConfig
from pubgo.utils.maven.resolver import resolve_target
from pubgo.utils.maven.version import VersionClass, classify


def acme(**overrides):
    values = dict(
        name='acme',
        base_url='https://repo.example/acme',
        username_env='ACME_USER',
        password_env='ACME_PASS',
    )
    values.update(overrides)
    return RepositoryConfig(**values)


def refuse(username_env, password_env):
    raise AssertionError("credential provider must not be called")


class TestClassify(unittest.TestCase):
    """Test version classification."""

    def test_release(self):
        self.assertIs(classify('2.0.2'), VersionClass.RELEASE)

    def test_snapshot(self):
        self.assertIs(classify('2.0.2-SNAPSHOT'), VersionClass.SNAPSHOT)

    def test_suffix_must_match_exactly(self):
        for version in ('2.0.2-snapshot', '2.0.2-SNAPSHOT.1', 'SNAPSHOT', '2.0.2SNAPSHOT', ''):
            with self.subTest(version=version):
                self.assertIs(classify(version), VersionClass.RELEASE)

    def test_bare_suffix_is_snapshot(self):
        self.assertIs(classify('-SNAPSHOT'), VersionClass.SNAPSHOT)

    def test_is_deterministic(self):
        self.assertEqual([classify('1.0-SNAPSHOT') for _ in range(3)], [VersionClass.SNAPSHOT] * 3)


class TestCredentials(unittest.TestCase):
    """Test credential lookup from environment variables."""

    def test_resolves_from_os_environ(self):
        with patch.dict(os.environ, {'ACME_USER': 'deployer', 'ACME_PASS': 's3cret'}):
            credentials = resolve_credentials('ACME_USER', 'ACME_PASS')

        self.assertEqual(credentials, Credentials('deployer', 's3cret'))
        self.assertEqual(credentials.as_auth(), ('deployer', 's3cret'))

    def test_missing_username_names_slot(self):
        with self.assertRaises(MissingCredentialError) as ctx:
            resolve_credentials('ACME_USER', 'ACME_PASS', environ={'ACME_PASS': 'x'})

        self.assertEqual(ctx.exception.slot, 'ACME_USER')
        self.assertIn('ACME_USER', str(ctx.exception))

    def test_missing_password_names_slot(self):
        with self.assertRaises(MissingCredentialError) as ctx:
            resolve_credentials('ACME_USER', 'ACME_PASS', environ={'ACME_USER': 'deployer'})

        self.assertEqual(ctx.exception.slot, 'ACME_PASS')

    def test_empty_value_is_missing(self):
        with self.assertRaises(MissingCredentialError) as ctx:
            resolve_credentials('ACME_USER', 'ACME_PASS',
                                environ={'ACME_USER': 'deployer', 'ACME_PASS': ''})

        self.assertEqual(ctx.exception.slot, 'ACME_PASS')

    def test_not_cached_between_calls(self):
        with patch.dict(os.environ, {'ACME_USER': 'first', 'ACME_PASS': 'p'}):
            first = resolve_credentials('ACME_USER', 'ACME_PASS')
        with patch.dict(os.environ, {'ACME_USER': 'second', 'ACME_PASS': 'p'}):
            second = resolve_credentials('ACME_USER', 'ACME_PASS')

        self.assertEqual(first.username, 'first')
        self.assertEqual(second.username, 'second')

    def test_repr_masks_password(self):
        self.assertNotIn('s3cret', repr(Credentials('deployer', 's3cret')))


class TestResolveTarget(unittest.TestCase):
    """Test repository target resolution."""

    def setUp(self):
        self.credentials = Credentials('deployer', 's3cret')
        self.provider = Mock(return_value=self.credentials)

    def test_release_target(self):
        target = resolve_target(acme(), VersionClass.RELEASE, self.provider)

        self.assertEqual(target.url, 'https://repo.example/acme/releases')
        self.assertEqual(target.display_name, 'acmeReleases')
        self.assertIs(target.credentials, self.credentials)
        self.assertFalse(target.local)
        self.provider.assert_called_once_with('ACME_USER', 'ACME_PASS')

    def test_snapshot_target(self):
        target = resolve_target(acme(), VersionClass.SNAPSHOT, self.provider)

        self.assertEqual(target.url, 'https://repo.example/acme/snapshots')
        self.assertEqual(target.display_name, 'acmeSnapshots')

    def test_snapshots_disabled_skips_without_credential_lookup(self):
        target = resolve_target(acme(snapshots_enabled=False), VersionClass.SNAPSHOT, refuse)

        self.assertIsNone(target)

    def test_snapshots_disabled_still_publishes_releases(self):
        target = resolve_target(acme(snapshots_enabled=False), VersionClass.RELEASE, self.provider)

        self.assertEqual(target.display_name, 'acmeReleases')

    def test_missing_credential_propagates(self):
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(MissingCredentialError) as ctx:
                resolve_target(acme(), VersionClass.RELEASE)

        self.assertEqual(ctx.exception.slot, 'ACME_USER')

    def test_optional_flag_is_carried(self):
        target = resolve_target(acme(optional=True), VersionClass.RELEASE, self.provider)

        self.assertTrue(target.optional)


if __name__ == '__main__':
    unittest.main()
