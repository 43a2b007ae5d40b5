import json
import unittest
from unittest import mock
from django.db.utils import OperationalError
from django.test import RequestFactory
from apps.common import views


class HealthViewsUnitTests(unittest.TestCase):
    def test_live_health_returns_alive_payload(self):
        response = views.live_health(None)
        self.assertEqual(response.status_code, 200)
        payload = json.loads(response.content)
        self.assertEqual(payload['status'], 'alive')

    @mock.patch('apps.common.views._db_check', return_value={'status': 'ok', 'latency_ms': 1.23})
    def test_ready_health_ok_when_database_answers(self, mock_db_check):
        response = views.ready_health(None)
        self.assertEqual(response.status_code, 200)
        payload = json.loads(response.content)
        self.assertEqual(payload['status'], 'ok')
        self.assertEqual(payload['checks']['database'], mock_db_check.return_value)

    @mock.patch('apps.common.views._db_check', return_value={'status': 'fail', 'error': 'db down'})
    def test_ready_health_degraded_on_database_failure(self, mock_db_check):
        response = views.ready_health(None)
        self.assertEqual(response.status_code, 503)
        payload = json.loads(response.content)
        self.assertEqual(payload['status'], 'degraded')
        self.assertEqual(payload['checks']['database'], mock_db_check.return_value)

    def test_db_check_reports_operational_error(self):
        broken = mock.MagicMock()
        broken.cursor.side_effect = OperationalError('connection refused')
        with mock.patch.object(views, 'connections', {'default': broken}):
            result = views._db_check()
        self.assertEqual(result['status'], 'fail')
        self.assertIn('connection refused', result['error'])


class JsonErrorHandlerTests(unittest.TestCase):
    def setUp(self):
        self.factory = RequestFactory()

    def test_not_found_is_json(self):
        response = views.not_found(self.factory.get('/nowhere'), Exception('missing'))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response['Content-Type'], 'application/json')
        self.assertEqual(
            json.loads(response.content),
            {'error': 'Resource not found', 'code': 'NOT_FOUND', 'status': 404},
        )

    def test_server_error_is_json(self):
        response = views.server_error(self.factory.get('/boom'))
        self.assertEqual(response.status_code, 500)
        self.assertEqual(json.loads(response.content)['code'], 'SERVER_ERROR')
