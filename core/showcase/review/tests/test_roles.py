"""Tests for :class:`.RoleResolver`."""

from unittest import TestCase, mock

from ..domain import Vote
from ..services.roles import RoleResolver


class TestResolveRole(TestCase):
    """Test :meth:`.RoleResolver.resolve_role`."""

    def setUp(self):
        """Members with various roles."""
        self.roles = {
            '1': ['staff'],
            '2': ['veterans', 'other'],
            '3': ['veterans', 'staff'],
            '4': ['other'],
        }
        self.resolver = RoleResolver(lambda mid: self.roles.get(mid, []),
                                     'staff', 'veterans')

    def test_roles(self):
        """Community roles map to voting roles."""
        self.assertEqual(self.resolver.resolve_role('1'), Vote.Role.STAFF)
        self.assertEqual(self.resolver.resolve_role('2'), Vote.Role.VETERAN)
        self.assertIsNone(self.resolver.resolve_role('4'))
        self.assertIsNone(self.resolver.resolve_role('5'))

    def test_staff_takes_priority(self):
        """Members with both roles vote as staff."""
        self.assertEqual(self.resolver.resolve_role('3'), Vote.Role.STAFF)

    def test_resolved_when_asked(self):
        """Roles are looked up each time, not remembered."""
        self.assertEqual(self.resolver.resolve_role('4'), None)
        self.roles['4'] = ['staff']
        self.assertEqual(self.resolver.resolve_role('4'), Vote.Role.STAFF)

    @mock.patch('showcase.review.services.roles.get_application_config')
    def test_role_ids_from_config(self, mock_get_config):
        """Role IDs default to the application config."""
        mock_get_config.return_value = {'STAFF_ROLE_ID': 'mods',
                                        'VETERANS_ROLE_ID': 'vets'}
        resolver = RoleResolver(lambda mid: ['vets'])
        self.assertEqual(resolver.resolve_role('1'), Vote.Role.VETERAN)

    def test_unconfigured_roles(self):
        """Nobody can vote if the role IDs are not set."""
        resolver = RoleResolver(lambda mid: [''], '', '')
        self.assertIsNone(resolver.resolve_role('1'))
