import tempfile
import unittest
from datetime import date
from pathlib import Path

from fastapi.testclient import TestClient

from fitlog.api.api_run import app
from fitlog.tests.support import install_overrides, nutrition_plan_dict

USER = {"X-User-Id": "u1"}


class TestShoppingListAPI(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        install_overrides(app, Path(self._tmp.name))

    def tearDown(self):
        app.dependency_overrides.clear()
        self._tmp.cleanup()

    def _names(self, headers=USER):
        return [i['item_name'] for i in self.client.get('/api/shopping-list', headers=headers).json()['items']]

    def test_generate_without_plan(self):
        data = self.client.post('/api/shopping-list/generate', headers=USER).json()
        self.assertEqual(data['count'], 0)
        self.assertEqual(data['notice'], 'No active nutrition plan')

    def test_generate_from_remaining_days(self):
        self.client.post('/api/plans/nutrition', json=nutrition_plan_dict(), headers=USER)
        self.client.post('/api/shopping-list', json={"name": "old entry"}, headers=USER)

        resp = self.client.post('/api/shopping-list/generate', headers=USER)
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data['count'], 6)
        self.assertEqual(data['items'][2]['item_name'], '800 g rice')
        self.assertEqual(self._names()[:3], ['320 g oats', '1000 ml milk', '800 g rice'])
        self.assertNotIn('old entry', self._names())

    def test_nothing_left_keeps_current_list(self):
        self.client.post('/api/plans/nutrition', json=nutrition_plan_dict(), headers=USER)
        self.client.post('/api/shopping-list', json={"name": "coffee"}, headers=USER)
        app.dependency_overrides.clear()
        # Sunday: the plan has no meals left this week
        install_overrides(app, Path(self._tmp.name), today=date(2024, 1, 7))

        data = self.client.post('/api/shopping-list/generate', headers=USER).json()
        self.assertEqual(data['notice'], 'Nothing left to buy this week')
        self.assertEqual(self._names(), ['coffee'])

    def test_add_toggle_delete(self):
        item = self.client.post('/api/shopping-list', json={"name": "  bananas "}, headers=USER).json()
        self.assertEqual(item['item_name'], 'bananas')
        self.client.post('/api/shopping-list', json={"name": "bread"}, headers=USER)

        toggled = self.client.post(f"/api/shopping-list/{item['id']}/toggle", headers=USER).json()
        self.assertTrue(toggled['is_checked'])
        # Checked entries sort after unchecked ones
        self.assertEqual(self._names(), ['bread', 'bananas'])
        # Other users cannot see or touch the entry
        self.assertEqual(self._names({"X-User-Id": "u2"}), [])
        resp = self.client.delete(f"/api/shopping-list/{item['id']}", headers={"X-User-Id": "u2"})
        self.assertEqual(resp.status_code, 404)

        resp = self.client.delete(f"/api/shopping-list/{item['id']}", headers=USER)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self._names(), ['bread'])
        self.assertEqual(self.client.post('/api/shopping-list/missing/toggle', headers=USER).status_code, 404)

    def test_blank_name_rejected(self):
        resp = self.client.post('/api/shopping-list', json={"name": "   "}, headers=USER)
        self.assertEqual(resp.status_code, 422)

    def test_clear(self):
        self.client.post('/api/shopping-list', json={"name": "milk"}, headers=USER)
        self.client.post('/api/shopping-list', json={"name": "eggs"}, headers=USER)
        data = self.client.delete('/api/shopping-list', headers=USER).json()
        self.assertEqual(data['removed'], 2)
        self.assertEqual(self._names(), [])

    def test_pdf_export(self):
        self.client.post('/api/shopping-list', json={"name": "milk"}, headers=USER)
        resp = self.client.get('/api/shopping-list/pdf', headers=USER)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers['content-type'], 'application/pdf')
        self.assertTrue(resp.content.startswith(b'%PDF'))


if __name__ == '__main__':
    unittest.main()
