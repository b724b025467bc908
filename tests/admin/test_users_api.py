from tests.admin.base import *  # noqa: F401,F403


class AdminUserApiTests(AdminApiBase):
    def _seed(self):
        return self._add(
            AdminUser(name="Root", email="root@example.com", role="admin", password_hash="x"),
            AdminUser(name="Ed", email="ed@example.com", role="editor", settings={"theme": "dark", "notifications": {"email": False, "push": True}}),
            AdminUser(name="Vi", email="vi@example.com", role="viewer", is_active=False),
        )

    def test_users_are_admin_only(self):
        self._seed()
        for role in ("editor", "viewer"):
            response = self.client.get("/api/admin/users", headers=self._auth_headers(role))
            self.assertEqual(response.status_code, 403)
        self.assertEqual(self.client.get("/api/admin/users", headers=self._auth_headers("ADMIN")).status_code, 200)

    def test_list_filters_and_hidden_hash(self):
        self._seed()
        headers = self._auth_headers()
        body = self.client.get("/api/admin/users?role=editor", headers=headers).json()
        self.assertEqual([item["email"] for item in body["items"]], ["ed@example.com"])
        self.assertNotIn("password_hash", body["items"][0])
        self.assertEqual(self.client.get("/api/admin/users?status=false", headers=headers).json()["total"], 1)
        self.assertEqual(self.client.get("/api/admin/users?role=owner", headers=headers).status_code, 400)

    def test_stats_and_export(self):
        self._seed()
        headers = self._auth_headers()
        stats = self.client.get("/api/admin/users/stats", headers=headers).json()
        self.assertEqual(stats["total"], 3)
        self.assertEqual(stats["inactive"], 1)
        self.assertEqual(len(stats["byRole"]), 3)

        export = self.client.get("/api/admin/users/export?search=ed@&sort=email&order=asc", headers=headers)
        lines = export.text.splitlines()
        self.assertIn("settings.theme", lines[0])
        self.assertNotIn("password", lines[0])
        self.assertEqual(len(lines), 2)
        self.assertIn('"dark","false","true"', lines[1])

    def test_update_merges_settings(self):
        _, editor_id, _ = self._seed()
        response = self.client.put(
            f"/api/admin/users/{editor_id}",
            json={"role": "Viewer", "settings": {"theme": "light"}},
            headers=self._auth_headers(),
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["role"], "viewer")
        self.assertEqual(body["settings"]["theme"], "light")
        self.assertEqual(body["settings"]["notifications"], {"email": False, "push": True})

    def test_cannot_demote_or_delete_self(self):
        root_id, _, _ = self._seed()
        headers = self._auth_headers(sub=root_id)
        response = self.client.put(f"/api/admin/users/{root_id}", json={"role": "viewer"}, headers=headers)
        self.assertEqual(response.status_code, 400)
        response = self.client.delete(f"/api/admin/users/{root_id}", headers=headers)
        self.assertEqual(response.status_code, 400)

    def test_delete_other_user(self):
        _, _, viewer_id = self._seed()
        headers = self._auth_headers()
        self.assertEqual(self.client.delete(f"/api/admin/users/{viewer_id}", headers=headers).status_code, 200)
        self.assertEqual(self.client.get(f"/api/admin/users/{viewer_id}", headers=headers).status_code, 404)

    def test_settings_reject_unknown_theme_and_keys(self):
        _, editor_id, _ = self._seed()
        headers = self._auth_headers()
        for settings_payload in ({"theme": "purple"}, {"junk": [1, 2]}, {"notifications": {"sms": True}}):
            response = self.client.put(f"/api/admin/users/{editor_id}", json={"settings": settings_payload}, headers=headers)
            self.assertEqual(response.status_code, 400, settings_payload)
        stored = self.client.get(f"/api/admin/users/{editor_id}", headers=headers).json()["settings"]
        self.assertEqual(stored, {"theme": "dark", "notifications": {"email": False, "push": True}})

    def test_partial_notifications_keep_other_flag(self):
        _, editor_id, _ = self._seed()
        headers = self._auth_headers()
        response = self.client.put(
            f"/api/admin/users/{editor_id}",
            json={"settings": {"notifications": {"email": True}}},
            headers=headers,
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["settings"], {"theme": "dark", "notifications": {"email": True, "push": True}})

        export = self.client.get("/api/admin/users/export?search=ed@", headers=headers)
        self.assertIn('"dark","true","true"', export.text.splitlines()[1])
