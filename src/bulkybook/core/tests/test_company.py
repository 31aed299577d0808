"""Tests for admin company management."""

from bulkybook.core.models import Company


class TestCompanyAdmin:
    def test_create_company(self, admin_client):
        response = admin_client.post(
            "/admin/company/upsert",
            {"name": "Readers Co", "city": "Austin", "state": "TX"},
        )

        assert response.status_code == 302
        assert Company.objects.filter(name="Readers Co", city="Austin").exists()

    def test_edit_company(self, admin_client, company):
        admin_client.post(f"/admin/company/upsert/{company.pk}", {"name": "Acme Publishing"})

        company.refresh_from_db()
        assert company.name == "Acme Publishing"

    def test_edit_missing_company_is_404(self, admin_client):
        response = admin_client.get("/admin/company/upsert/999")

        assert response.status_code == 404

    def test_delete_company_detaches_users(self, admin_client, company, company_user):
        response = admin_client.post(f"/admin/company/delete/{company.pk}")

        assert response.status_code == 302
        assert not Company.objects.filter(pk=company.pk).exists()
        company_user.refresh_from_db()
        assert company_user.company is None

    def test_list_shows_companies(self, admin_client, company):
        response = admin_client.get("/admin/company/index")

        assert response.status_code == 200
        assert "Acme Books" in response.content.decode()

    def test_employee_cannot_manage_companies(self, employee_client):
        response = employee_client.get("/admin/company/index")

        assert response.url == "/identity/Account/AccessDenied"
