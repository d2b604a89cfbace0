import re
from unittest.mock import patch

from django.test import SimpleTestCase, TestCase

from users.models import UserRole
from personnel.identifiers import (
    beat_code_base, generate_beat_code, generate_employee_id, generate_staff_id, initials_prefix,
    next_sequence_code,
)
from personnel.models import AdminProfile, Beat
from .base import StaffingFixturesMixin


class InitialsPrefixTests(SimpleTestCase):
    def test_takes_first_letter_of_each_word(self):
        self.assertEqual(initials_prefix('Lekki Phase One'), 'LPO')

    def test_truncates_to_three_letters(self):
        self.assertEqual(initials_prefix('Victoria Island Annex Two'), 'VIA')

    def test_short_names_are_not_padded(self):
        self.assertEqual(initials_prefix('Ikeja'), 'I')
        self.assertEqual(initials_prefix('Abuja central'), 'AC')

    def test_repeated_spaces_are_ignored(self):
        self.assertEqual(initials_prefix('  lekki   phase  '), 'LP')

    def test_beat_code_base(self):
        self.assertEqual(beat_code_base('Lekki Phase One'), 'BEAT-LPO-')


class NextSequenceCodeTests(SimpleTestCase):
    def test_starts_at_one_when_nothing_exists(self):
        self.assertEqual(next_sequence_code('SUP', [], 5), 'SUP00001')

    def test_uses_max_plus_one(self):
        codes = ['BEAT-LPO-001', 'BEAT-LPO-007', 'BEAT-LPO-003']
        self.assertEqual(next_sequence_code('BEAT-LPO-', codes, 3), 'BEAT-LPO-008')

    def test_ignores_codes_that_do_not_match_exactly(self):
        codes = ['SUP00002', 'SUP00009-1234', 'GSUP00050', None]
        self.assertEqual(next_sequence_code('SUP', codes, 5), 'SUP00003')

    def test_grows_past_width(self):
        self.assertEqual(next_sequence_code('GRD', ['GRD99999'], 5), 'GRD100000')


class GeneratedCodeTests(StaffingFixturesMixin, TestCase):
    def setUp(self):
        self.location = self.make_location('Lekki Phase One')

    def make_beat(self, location, beat_code):
        return Beat.objects.create(beat_code=beat_code, beat_name='Gate', location=location, shift_type='DAY')

    def test_first_beat_code_for_location(self):
        self.assertEqual(generate_beat_code(self.location), 'BEAT-LPO-001')

    def test_beat_codes_are_scoped_to_their_location(self):
        self.make_beat(self.location, 'BEAT-LPO-001')
        self.make_beat(self.location, 'BEAT-LPO-002')
        other = self.make_location('Ikoyi Towers')
        self.assertEqual(generate_beat_code(self.location), 'BEAT-LPO-003')
        self.assertEqual(generate_beat_code(other), 'BEAT-IT-001')

    def test_collision_across_locations_gets_timestamp_suffix(self):
        self.make_beat(self.location, 'BEAT-LPO-001')
        lookalike = self.make_location('Lagos Port Office')
        with patch('personnel.identifiers.collision_suffix', return_value='4821'):
            self.assertEqual(generate_beat_code(lookalike), 'BEAT-LPO-001-4821')

    def test_collision_suffix_is_four_digits(self):
        self.make_beat(self.location, 'BEAT-LPO-001')
        lookalike = self.make_location('Lagos Port Office')
        self.assertRegex(generate_beat_code(lookalike), re.compile(r'^BEAT-LPO-001-\d{4}$'))

    def test_employee_ids_follow_role_prefix(self):
        self.assertEqual(generate_employee_id('SUPERVISOR'), 'SUP00001')
        self.assertEqual(generate_employee_id('GENERAL_SUPERVISOR'), 'GSUP00001')
        self.assertEqual(generate_employee_id('GUARD'), 'GRD00001')
        self.assertEqual(generate_employee_id('HR'), 'HR00001')
        self.assertEqual(generate_employee_id('SECRETARY'), 'SEC00001')

    def test_employee_id_continues_after_existing(self):
        self.make_user('a@example.com', UserRole.SUPERVISOR, employee_id='SUP00004')
        self.make_user('b@example.com', UserRole.GENERAL_SUPERVISOR, employee_id='GSUP00010')
        self.assertEqual(generate_employee_id('SUPERVISOR'), 'SUP00005')
        self.assertEqual(generate_employee_id('GENERAL_SUPERVISOR'), 'GSUP00011')

    def test_staff_ids_are_sequential(self):
        self.assertEqual(generate_staff_id(), 'ADM-00001')
        user = self.make_user('admin@example.com', UserRole.ADMIN)
        AdminProfile.objects.create(user=user, staff_id='ADM-00001', job_title='Clerk', department='Records')
        self.assertEqual(generate_staff_id(), 'ADM-00002')
