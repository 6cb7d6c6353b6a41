from unittest.mock import patch

from jobboard.models import Application

from tests.conftest import count_rows, session_hiding, signup


class TestApply:
    def test_apply(self, seeker, company, create_job):
        client, user = seeker
        job = create_job(company[0])

        response = client.post(
            f"/api/jobs/{job['id']}/apply",
            json={"coverLetter": "I would love to join.", "answers": {"notice": "2 weeks"}},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Application submitted successfully"
        assert body["application"]["status"] == "PENDING"
        assert body["application"]["coverLetter"] == "I would love to join."
        assert body["application"]["answers"] == {"notice": "2 weeks"}
        assert count_rows(Application, user_id=user["id"], job_id=job["id"]) == 1

    def test_apply_without_body(self, seeker, company, create_job):
        client, _ = seeker
        job = create_job(company[0])

        response = client.post(f"/api/jobs/{job['id']}/apply")

        assert response.status_code == 200
        assert response.json()["application"]["coverLetter"] is None

    def test_apply_twice_conflicts(self, seeker, company, create_job):
        client, user = seeker
        job = create_job(company[0])
        client.post(f"/api/jobs/{job['id']}/apply")

        response = client.post(f"/api/jobs/{job['id']}/apply")

        assert response.status_code == 409
        assert response.json() == {"error": "You have already applied for this job"}
        assert count_rows(Application, user_id=user["id"]) == 1

    def test_concurrent_duplicate_apply_conflicts(self, seeker, company, create_job):
        client, user = seeker
        job = create_job(company[0])
        client.post(f"/api/jobs/{job['id']}/apply")

        with patch("jobboard.api.routes.job_routes.get_db_session", lambda: session_hiding(Application)):
            response = client.post(f"/api/jobs/{job['id']}/apply")

        assert response.status_code == 409
        assert response.json() == {"error": "You have already applied for this job"}
        assert count_rows(Application, user_id=user["id"], job_id=job["id"]) == 1

    def test_company_cannot_apply(self, company, create_job):
        client, _ = company
        job = create_job(client)

        response = client.post(f"/api/jobs/{job['id']}/apply")

        assert response.status_code == 403
        assert response.json() == {"error": "Only job seekers can apply for positions"}
        assert count_rows(Application) == 0

    def test_closed_job_rejects_applications(self, seeker, company, create_job):
        job = create_job(company[0], status="CLOSED")

        response = seeker[0].post(f"/api/jobs/{job['id']}/apply")

        assert response.status_code == 400
        assert response.json() == {"error": "This job is no longer accepting applications"}
        assert count_rows(Application) == 0

    def test_missing_job(self, seeker):
        response = seeker[0].post("/api/jobs/does-not-exist/apply")

        assert response.status_code == 404
        assert count_rows(Application) == 0

    def test_requires_auth(self, client, company, create_job):
        job = create_job(company[0])

        response = client.post(f"/api/jobs/{job['id']}/apply")

        assert response.status_code == 401
        assert count_rows(Application) == 0


class TestMyApplications:
    def test_lists_with_job_and_company(self, seeker, company, create_job):
        client, _ = seeker
        job = create_job(company[0], title="Frontend Developer")
        client.post(f"/api/jobs/{job['id']}/apply")

        response = client.get("/api/profile/applications")

        assert response.status_code == 200
        applications = response.json()
        assert len(applications) == 1
        assert applications[0]["job"] == {
            "id": job["id"],
            "title": "Frontend Developer",
            "company": {"name": "TechCorp"},
        }

    def test_only_own_applications(self, seeker, make_client, company, create_job):
        job = create_job(company[0])
        other = make_client()
        signup(other, "other@example.com")
        other.post(f"/api/jobs/{job['id']}/apply")

        assert seeker[0].get("/api/profile/applications").json() == []


class TestCompanyReview:
    def test_company_sees_applications_with_applicant(self, seeker, company, create_job):
        seeker_client, user = seeker
        job = create_job(company[0])
        seeker_client.post(f"/api/jobs/{job['id']}/apply")

        response = company[0].get("/api/companies/applications")

        assert response.status_code == 200
        applications = response.json()
        assert len(applications) == 1
        assert applications[0]["user"]["email"] == "seeker@example.com"
        assert applications[0]["user"]["id"] == user["id"]
        assert applications[0]["job"]["title"] == job["title"]

    def test_filter_by_job_and_status(self, seeker, company, create_job):
        first = create_job(company[0], title="First Role")
        second = create_job(company[0], title="Second Role")
        seeker[0].post(f"/api/jobs/{first['id']}/apply")
        seeker[0].post(f"/api/jobs/{second['id']}/apply")

        by_job = company[0].get("/api/companies/applications", params={"job_id": first["id"]}).json()
        accepted = company[0].get("/api/companies/applications", params={"status": "ACCEPTED"}).json()

        assert [a["jobId"] for a in by_job] == [first["id"]]
        assert accepted == []

    def test_update_status(self, seeker, company, create_job):
        job = create_job(company[0])
        application = seeker[0].post(f"/api/jobs/{job['id']}/apply").json()["application"]

        response = company[0].put(
            f"/api/companies/applications/{application['id']}/status", json={"status": "ACCEPTED"}
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Status updated to 'ACCEPTED'"}
        assert seeker[0].get("/api/profile/applications").json()[0]["status"] == "ACCEPTED"

    def test_invalid_status(self, seeker, company, create_job):
        job = create_job(company[0])
        application = seeker[0].post(f"/api/jobs/{job['id']}/apply").json()["application"]

        response = company[0].put(
            f"/api/companies/applications/{application['id']}/status", json={"status": "HIRED"}
        )

        assert response.status_code == 400
        assert count_rows(Application, status="PENDING") == 1

    def test_other_company_cannot_review(self, seeker, company, other_company, create_job):
        job = create_job(company[0])
        application = seeker[0].post(f"/api/jobs/{job['id']}/apply").json()["application"]

        response = other_company[0].put(
            f"/api/companies/applications/{application['id']}/status", json={"status": "REJECTED"}
        )

        assert response.status_code == 404
        assert response.json() == {"error": "Application not found"}
        assert other_company[0].get("/api/companies/applications").json() == []

    def test_job_seeker_cannot_list_company_applications(self, seeker):
        response = seeker[0].get("/api/companies/applications")

        assert response.status_code == 403
