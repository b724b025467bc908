from tests.admin.base import *  # noqa: F401,F403


class AdUnitApiTests(AdminApiBase):
    def _create(self, **overrides):
        payload = {"name": "Home banner", "ad_type": "banner", "ad_unit_code": "ca-app-pub-1/1", "platform": "android"}
        payload.update(overrides)
        return self.client.post("/api/admin/ad-units", json=payload, headers=self._auth_headers("editor"))

    def test_create_list_and_filters(self):
        self.assertEqual(self._create().status_code, 201)
        self.assertEqual(self._create(name="Reward", ad_type="Rewarded", ad_unit_code="ca-app-pub-1/2", platform="iOS").status_code, 201)
        self.assertEqual(self._create(name="Both", ad_type="interstitial", ad_unit_code="ca-app-pub-1/3", platform="both", is_active=False).status_code, 201)

        headers = self._auth_headers("viewer")
        response = self.client.get("/api/admin/ad-units?platform=ios", headers=headers)
        self.assertEqual([item["name"] for item in response.json()["items"]], ["Reward"])
        self.assertEqual(response.json()["items"][0]["ad_type"], "rewarded")

        response = self.client.get("/api/admin/ad-units?adType=banner&status=true", headers=headers)
        self.assertEqual(response.json()["total"], 1)

        response = self.client.get("/api/admin/ad-units?status=false", headers=headers)
        self.assertEqual([item["name"] for item in response.json()["items"]], ["Both"])

        response = self.client.get("/api/admin/ad-units?search=pub-1/2", headers=headers)
        self.assertEqual(response.json()["total"], 1)

    def test_invalid_platform_filter(self):
        response = self.client.get("/api/admin/ad-units?platform=windows", headers=self._auth_headers())
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["field"], "platform")

    def test_invalid_payload_type(self):
        response = self._create(ad_type="popup")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["field"], "ad_type")

    def test_duplicate_code_is_409(self):
        self.assertEqual(self._create().status_code, 201)
        response = self._create(name="Copy")
        self.assertEqual(response.status_code, 409)
        # the session recovered after the rollback
        self.assertEqual(self.client.get("/api/admin/ad-units", headers=self._auth_headers()).json()["total"], 1)

    def test_toggle_update_delete(self):
        unit_id = self._create().json()["id"]
        headers = self._auth_headers("editor")
        toggled = self.client.patch(f"/api/admin/ad-units/{unit_id}/toggle", headers=headers)
        self.assertEqual(toggled.json(), {"id": unit_id, "is_active": False})
        toggled = self.client.patch(f"/api/admin/ad-units/{unit_id}/toggle", headers=headers)
        self.assertTrue(toggled.json()["is_active"])

        updated = self.client.put(
            f"/api/admin/ad-units/{unit_id}",
            json={"name": "Renamed", "ad_type": "banner", "ad_unit_code": "ca-app-pub-1/1"},
            headers=headers,
        )
        self.assertEqual(updated.json()["name"], "Renamed")
        self.assertEqual(updated.json()["platform"], "both")

        self.assertEqual(self.client.delete(f"/api/admin/ad-units/{unit_id}", headers=headers).status_code, 200)
        self.assertEqual(self.client.get(f"/api/admin/ad-units/{unit_id}", headers=headers).status_code, 404)

    def test_types_and_stats(self):
        self._create()
        self._create(name="R", ad_type="rewarded", ad_unit_code="c2", platform="ios", is_active=False)
        types = self.client.get("/api/admin/ad-units/types", headers=self._auth_headers("viewer")).json()
        self.assertEqual([item["value"] for item in types["types"]], ["banner", "interstitial", "rewarded"])

        stats = self.client.get("/api/admin/ad-units/stats", headers=self._auth_headers()).json()
        self.assertEqual(stats["total"], 2)
        self.assertEqual(stats["active"], 1)
        self.assertEqual(stats["inactive"], 1)
        self.assertEqual(stats["byType"], [{"key": "banner", "count": 1}, {"key": "rewarded", "count": 1}])

    def test_export(self):
        self._create(description='Top of "home"')
        response = self.client.get("/api/admin/ad-units/export?filter=this-month", headers=self._auth_headers())
        self.assertEqual(response.status_code, 200)
        lines = response.text.splitlines()
        self.assertEqual(lines[0], "id,name,ad_type,ad_unit_code,platform,is_active,description,created_at")
        self.assertIn('"Home banner","banner","ca-app-pub-1/1","android","true","Top of ""home"""', lines[1])
        self.assertRegex(response.headers["content-disposition"], r"filename=ad-units-[A-Z][a-z]{2}-\d{4}-\d{8}\.csv$")
