"""
Tests for the /companies endpoints with a mocked CompanyRepository.
"""
from app.errors import BadRequestError, ConflictError, NotFoundError

NEW_COMPANY = {
    "handle": "new",
    "name": "New",
    "logoUrl": "http://new.img",
    "description": "DescNew",
    "numEmployees": 10,
}


class TestCreateCompany:
    def test_ok_for_admin(self, client, company_repo, admin_headers):
        company_repo.create.return_value = NEW_COMPANY
        resp = client.post("/companies", json=NEW_COMPANY, headers=admin_headers)
        assert resp.status_code == 201
        assert resp.json() == {"company": NEW_COMPANY}

    def test_forbidden_for_users(self, client, u1_headers):
        resp = client.post("/companies", json=NEW_COMPANY, headers=u1_headers)
        assert resp.status_code == 403

    def test_bad_request_with_invalid_handle(self, client, admin_headers):
        resp = client.post("/companies", json={**NEW_COMPANY, "handle": "Not Valid"}, headers=admin_headers)
        assert resp.status_code == 400

    def test_duplicate_is_conflict(self, client, company_repo, admin_headers):
        company_repo.create.side_effect = ConflictError("Duplicate company: new")
        resp = client.post("/companies", json=NEW_COMPANY, headers=admin_headers)
        assert resp.status_code == 409
        assert resp.json()["error"]["message"] == "Duplicate company: new"


class TestListCompanies:
    def test_ok_for_anon(self, client, company_repo):
        company_repo.find_all.return_value = [NEW_COMPANY]
        resp = client.get("/companies")
        assert resp.json() == {"companies": [NEW_COMPANY]}
        company_repo.find_all.assert_called_once_with({})

    def test_filters(self, client, company_repo):
        company_repo.find_all.return_value = []
        client.get("/companies?nameLike=ne&minEmployees=2&maxEmployees=20")
        company_repo.find_all.assert_called_once_with({"nameLike": "ne", "minEmployees": 2, "maxEmployees": 20})

    def test_unknown_filter(self, client, company_repo):
        resp = client.get("/companies?state=CA")
        assert resp.status_code == 400
        company_repo.find_all.assert_not_called()

    def test_min_greater_than_max(self, client, company_repo):
        company_repo.find_all.side_effect = BadRequestError("minEmployees cannot be greater than maxEmployees")
        resp = client.get("/companies?minEmployees=10&maxEmployees=2")
        assert resp.status_code == 400


class TestGetCompany:
    def test_works_for_anon(self, client, company_repo):
        company_repo.get.return_value = {**NEW_COMPANY, "jobs": []}
        resp = client.get("/companies/new")
        assert resp.json()["company"]["jobs"] == []

    def test_not_found(self, client, company_repo):
        company_repo.get.side_effect = NotFoundError("No company: nope")
        resp = client.get("/companies/nope")
        assert resp.status_code == 404


class TestUpdateCompany:
    def test_works_for_admin(self, client, company_repo, admin_headers):
        company_repo.update.return_value = {**NEW_COMPANY, "name": "New-new"}
        resp = client.patch("/companies/new", json={"name": "New-new"}, headers=admin_headers)
        assert resp.json()["company"]["name"] == "New-new"
        company_repo.update.assert_called_once_with("new", {"name": "New-new"})

    def test_bad_request_on_handle_change_attempt(self, client, company_repo, admin_headers):
        resp = client.patch("/companies/new", json={"handle": "new-new"}, headers=admin_headers)
        assert resp.status_code == 400
        company_repo.update.assert_not_called()

    def test_unauth_for_anon(self, client):
        resp = client.patch("/companies/new", json={"name": "x"})
        assert resp.status_code == 401


class TestDeleteCompany:
    def test_works_for_admin(self, client, company_repo, admin_headers):
        resp = client.delete("/companies/new", headers=admin_headers)
        assert resp.json() == {"deleted": "new"}

    def test_forbidden_for_users(self, client, u1_headers):
        resp = client.delete("/companies/new", headers=u1_headers)
        assert resp.status_code == 403
