from django.test import SimpleTestCase, TestCase, override_settings
from django.urls import reverse
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.test import APIClient

from core.exceptions import Conflict, custom_exception_handler


class HealthCheckTests(TestCase):
    def test_health(self):
        response = APIClient().get(reverse('health-check'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, {'success': True, 'database': 'ok'})


class ExceptionHandlerTests(SimpleTestCase):
    def test_conflict(self):
        response = custom_exception_handler(Conflict('This email is already registered'), {})
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data, {
            'success': False, 'status': 'error', 'message': 'This email is already registered',
        })

    def test_validation_error_keeps_field_errors(self):
        response = custom_exception_handler(ValidationError({'email': ['Enter a valid email address.']}), {})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'email: Enter a valid email address.')
        self.assertEqual(response.data['errors'], {'email': ['Enter a valid email address.']})

    def test_non_field_errors_have_no_prefix(self):
        response = custom_exception_handler(ValidationError({'non_field_errors': ['Dates overlap.']}), {})
        self.assertEqual(response.data['message'], 'Dates overlap.')

    def test_not_found(self):
        response = custom_exception_handler(NotFound('Location not found'), {})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data['message'], 'Location not found')

    @override_settings(DEBUG=False)
    def test_unexpected_error_is_redacted(self):
        response = custom_exception_handler(RuntimeError('database password is hunter2'), {})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data['message'], 'Something went wrong')
        self.assertNotIn('stack', response.data)

    @override_settings(DEBUG=True)
    def test_unexpected_error_in_debug_has_stack(self):
        response = custom_exception_handler(RuntimeError('boom'), {})
        self.assertEqual(response.data['message'], 'boom')
        self.assertIn('stack', response.data)
