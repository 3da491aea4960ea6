"""Integration tests for the project invitation endpoints."""

from datetime import datetime, timedelta

import pytest

from tests.factories import ProjectInvitationFactory, utc_now
from tests.helpers import as_user

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


@pytest.fixture
async def project(make_project, owner):
    return await make_project(owner_id=owner.id, name="Webhook Relay")


@pytest.fixture
def seed_invitation(db_session, owner):
    """Persist an invitation and keep the project's invited set consistent."""

    async def _seed(project, invitee, *, overdue: bool = False, **kwargs):
        if overdue:
            invitation = ProjectInvitationFactory.overdue(
                project_id=project.id, inviter_id=owner.id, invitee_id=invitee.id, **kwargs
            )
        else:
            invitation = ProjectInvitationFactory.build(
                project_id=project.id, inviter_id=owner.id, invitee_id=invitee.id, **kwargs
            )
        if invitation.status == "PENDING":
            project.invited_user_ids = [*project.invited_user_ids, invitee.id]
        db_session.add_all([invitation, project])
        await db_session.commit()
        return invitation

    return _seed


async def _invite(client, project, invitee, owner):
    return await client.post(
        "/api/invitations",
        json={"projectId": project.id, "inviteeId": invitee.id},
        headers=as_user(owner.id),
    )


class TestInvite:
    async def test_invite_adds_user_to_invited_set(self, client, project, owner, other_user):
        response = await _invite(client, project, other_user, owner)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["status"] == "PENDING"
        assert data["inviterId"] == owner.id
        assert data["inviteeId"] == other_user.id
        assert data["projectName"] == "Webhook Relay"
        assert data["isExpired"] is False

        detail = (await client.get(f"/api/projects/{project.id}")).json()["data"]
        assert [u["id"] for u in detail["invitedUsers"]] == [other_user.id]
        assert detail["members"] == []

    async def test_invite_by_email(self, client, project, owner, other_user):
        response = await client.post(
            "/api/invitations",
            json={"projectId": project.id, "inviteeEmail": other_user.email},
            headers=as_user(owner.id),
        )

        assert response.status_code == 201
        assert response.json()["data"]["inviteeId"] == other_user.id

    async def test_default_expiry_is_seven_days(self, client, project, owner, other_user):
        response = await _invite(client, project, other_user, owner)

        data = response.json()["data"]
        lifetime = datetime.fromisoformat(data["expiresAt"]) - datetime.fromisoformat(
            data["sentAt"]
        )
        assert timedelta(days=7) - timedelta(seconds=5) < lifetime <= timedelta(days=7)

    async def test_only_owner_can_invite(self, client, project, other_user, make_user):
        invitee = await make_user()

        response = await _invite(client, project, invitee, other_user)

        assert response.status_code == 403

    async def test_duplicate_pending_invitation_conflicts(
        self, client, project, owner, other_user
    ):
        await _invite(client, project, other_user, owner)

        response = await _invite(client, project, other_user, owner)

        assert response.status_code == 409

    async def test_owner_cannot_be_invited(self, client, project, owner):
        response = await _invite(client, project, owner, owner)

        assert response.status_code == 409

    async def test_member_cannot_be_invited(self, client, make_project, owner, other_user):
        project = await make_project(owner_id=owner.id, member_ids=[other_user.id])

        response = await _invite(client, project, other_user, owner)

        assert response.status_code == 409

    async def test_expired_pending_invitation_is_superseded(
        self, client, project, owner, other_user, seed_invitation
    ):
        stale = await seed_invitation(project, other_user, overdue=True)

        response = await _invite(client, project, other_user, owner)

        assert response.status_code == 201
        old = (await client.get(f"/api/invitations/{stale.id}")).json()["data"]
        assert old["status"] == "EXPIRED"

    async def test_unknown_invitee_email_is_not_found(self, client, project, owner):
        response = await client.post(
            "/api/invitations",
            json={"projectId": project.id, "inviteeEmail": "nobody@example.com"},
            headers=as_user(owner.id),
        )

        assert response.status_code == 404

    async def test_both_invitee_id_and_email_is_bad_request(
        self, client, project, owner, other_user
    ):
        response = await client.post(
            "/api/invitations",
            json={
                "projectId": project.id,
                "inviteeId": other_user.id,
                "inviteeEmail": other_user.email,
            },
            headers=as_user(owner.id),
        )

        assert response.status_code == 400

    async def test_past_expiry_is_bad_request(self, client, project, owner, other_user):
        response = await client.post(
            "/api/invitations",
            json={
                "projectId": project.id,
                "inviteeId": other_user.id,
                "expiresAt": (utc_now() - timedelta(hours=1)).isoformat(),
            },
            headers=as_user(owner.id),
        )

        assert response.status_code == 400


class TestBulkInvite:
    async def test_bulk_invite_by_email(self, client, project, owner, make_user):
        first = await make_user()
        second = await make_user()

        response = await client.post(
            "/api/invitations/bulk",
            json={"projectId": project.id, "emails": [first.email, second.email, first.email]},
            headers=as_user(owner.id),
        )

        assert response.status_code == 201
        invitee_ids = {i["inviteeId"] for i in response.json()["data"]}
        assert invitee_ids == {first.id, second.id}

    async def test_unknown_email_invites_nobody(self, client, project, owner, make_user):
        known = await make_user()

        response = await client.post(
            "/api/invitations/bulk",
            json={"projectId": project.id, "emails": [known.email, "ghost@example.com"]},
            headers=as_user(owner.id),
        )

        assert response.status_code == 404
        assert "ghost@example.com" in response.json()["message"]
        sent = await client.get("/api/invitations/sent", headers=as_user(owner.id))
        assert sent.json()["data"] == []

    async def test_empty_email_list_is_bad_request(self, client, project, owner):
        response = await client.post(
            "/api/invitations/bulk",
            json={"projectId": project.id, "emails": []},
            headers=as_user(owner.id),
        )

        assert response.status_code == 400


class TestRespond:
    async def test_accept_moves_invitee_into_members(self, client, project, owner, other_user):
        invitation = (await _invite(client, project, other_user, owner)).json()["data"]

        response = await client.post(
            f"/api/invitations/{invitation['id']}/respond",
            json={"status": "ACCEPTED"},
            headers=as_user(other_user.id),
        )

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "ACCEPTED"
        detail = (await client.get(f"/api/projects/{project.id}")).json()["data"]
        assert [m["id"] for m in detail["members"]] == [other_user.id]
        assert detail["invitedUsers"] == []
        assert detail["memberCount"] == 1

    async def test_reject_removes_invitee_from_invited_set(
        self, client, project, owner, other_user
    ):
        invitation = (await _invite(client, project, other_user, owner)).json()["data"]

        response = await client.post(
            f"/api/invitations/{invitation['id']}/respond",
            json={"status": "REJECTED"},
            headers=as_user(other_user.id),
        )

        assert response.status_code == 200
        detail = (await client.get(f"/api/projects/{project.id}")).json()["data"]
        assert detail["invitedUsers"] == []
        assert detail["members"] == []

    async def test_non_invitee_is_forbidden(self, client, project, owner, other_user):
        invitation = (await _invite(client, project, other_user, owner)).json()["data"]

        response = await client.post(
            f"/api/invitations/{invitation['id']}/respond",
            json={"status": "ACCEPTED"},
            headers=as_user(owner.id),
        )

        assert response.status_code == 403

    async def test_expired_invitation_cannot_be_accepted(
        self, client, project, other_user, seed_invitation
    ):
        invitation = await seed_invitation(project, other_user, overdue=True)

        response = await client.post(
            f"/api/invitations/{invitation.id}/respond",
            json={"status": "ACCEPTED"},
            headers=as_user(other_user.id),
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invitation has expired"
        detail = (await client.get(f"/api/projects/{project.id}")).json()["data"]
        assert detail["members"] == []

    async def test_second_response_is_bad_request(self, client, project, owner, other_user):
        invitation = (await _invite(client, project, other_user, owner)).json()["data"]
        url = f"/api/invitations/{invitation['id']}/respond"
        await client.post(url, json={"status": "REJECTED"}, headers=as_user(other_user.id))

        response = await client.post(
            url, json={"status": "ACCEPTED"}, headers=as_user(other_user.id)
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invitation has already been rejected"

    async def test_pending_is_not_a_valid_response(self, client, project, owner, other_user):
        invitation = (await _invite(client, project, other_user, owner)).json()["data"]

        response = await client.post(
            f"/api/invitations/{invitation['id']}/respond",
            json={"status": "PENDING"},
            headers=as_user(other_user.id),
        )

        assert response.status_code == 400


class TestManageInvitation:
    async def test_inviter_cannot_accept_on_behalf_of_invitee(
        self, client, project, owner, other_user
    ):
        invitation = (await _invite(client, project, other_user, owner)).json()["data"]

        response = await client.put(
            f"/api/invitations/{invitation['id']}",
            json={"status": "ACCEPTED"},
            headers=as_user(owner.id),
        )

        assert response.status_code == 400

    async def test_inviter_can_extend_expiry(self, client, project, owner, other_user):
        invitation = (await _invite(client, project, other_user, owner)).json()["data"]
        new_expiry = (utc_now() + timedelta(days=30)).replace(microsecond=0)

        response = await client.put(
            f"/api/invitations/{invitation['id']}",
            json={"expiresAt": new_expiry.isoformat()},
            headers=as_user(owner.id),
        )

        assert response.status_code == 200
        assert response.json()["data"]["expiresAt"] == new_expiry.isoformat()

    async def test_update_to_past_expiry_is_bad_request(self, client, project, owner, other_user):
        invitation = (await _invite(client, project, other_user, owner)).json()["data"]
        past = (utc_now() - timedelta(days=1)).replace(microsecond=0)

        response = await client.put(
            f"/api/invitations/{invitation['id']}",
            json={"expiresAt": past.isoformat()},
            headers=as_user(owner.id),
        )

        assert response.status_code == 400
        stored = (await client.get(f"/api/invitations/{invitation['id']}")).json()["data"]
        assert stored["expiresAt"] == invitation["expiresAt"]

    async def test_reopening_accepted_invitation_is_bad_request(
        self, client, project, owner, other_user
    ):
        invitation = (await _invite(client, project, other_user, owner)).json()["data"]
        await client.post(
            f"/api/invitations/{invitation['id']}/respond",
            json={"status": "ACCEPTED"},
            headers=as_user(other_user.id),
        )

        response = await client.put(
            f"/api/invitations/{invitation['id']}",
            json={"status": "PENDING"},
            headers=as_user(owner.id),
        )

        assert response.status_code == 400
        detail = (await client.get(f"/api/projects/{project.id}")).json()["data"]
        assert [m["id"] for m in detail["members"]] == [other_user.id]
        assert detail["invitedUsers"] == []

    async def test_reopening_rejected_invitation_is_bad_request(
        self, client, project, owner, other_user, seed_invitation
    ):
        rejected = await seed_invitation(project, other_user, status="REJECTED")

        response = await client.put(
            f"/api/invitations/{rejected.id}",
            json={"status": "PENDING"},
            headers=as_user(owner.id),
        )

        assert response.status_code == 400
        detail = (await client.get(f"/api/projects/{project.id}")).json()["data"]
        assert detail["invitedUsers"] == []

    async def test_owner_can_withdraw_pending_invitation(
        self, client, project, owner, other_user
    ):
        invitation = (await _invite(client, project, other_user, owner)).json()["data"]

        response = await client.put(
            f"/api/invitations/{invitation['id']}",
            json={"status": "REJECTED"},
            headers=as_user(owner.id),
        )

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "REJECTED"
        detail = (await client.get(f"/api/projects/{project.id}")).json()["data"]
        assert detail["invitedUsers"] == []

    async def test_unrelated_user_cannot_update(
        self, client, project, owner, other_user, make_user
    ):
        stranger = await make_user()
        invitation = (await _invite(client, project, other_user, owner)).json()["data"]

        response = await client.put(
            f"/api/invitations/{invitation['id']}",
            json={"status": "REJECTED"},
            headers=as_user(stranger.id),
        )

        assert response.status_code == 403

    async def test_delete_pending_invitation_clears_invited_set(
        self, client, project, owner, other_user
    ):
        invitation = (await _invite(client, project, other_user, owner)).json()["data"]

        response = await client.delete(
            f"/api/invitations/{invitation['id']}", headers=as_user(owner.id)
        )

        assert response.status_code == 200
        assert (await client.get(f"/api/invitations/{invitation['id']}")).status_code == 404
        detail = (await client.get(f"/api/projects/{project.id}")).json()["data"]
        assert detail["invitedUsers"] == []

    async def test_malformed_id_is_bad_request(self, client):
        response = await client.get("/api/invitations/xyz")

        assert response.status_code == 400


class TestInvitationQueries:
    async def test_my_invitations_lists_pending_only(
        self, client, make_project, owner, other_user, seed_invitation
    ):
        first = await make_project(owner_id=owner.id)
        second = await make_project(owner_id=owner.id)
        pending = await seed_invitation(first, other_user)
        await seed_invitation(second, other_user, status="REJECTED")

        response = await client.get("/api/invitations/my", headers=as_user(other_user.id))

        assert [i["id"] for i in response.json()["data"]] == [pending.id]

    async def test_search_by_project_and_status(
        self, client, project, make_user, seed_invitation
    ):
        a = await make_user()
        b = await make_user()
        accepted = await seed_invitation(project, a, status="ACCEPTED")
        await seed_invitation(project, b)

        response = await client.get(
            "/api/invitations", params={"projectId": project.id, "status": "ACCEPTED"}
        )

        body = response.json()
        assert [i["id"] for i in body["data"]] == [accepted.id]
        assert body["meta"]["totalElements"] == 1

    async def test_stats_count_overdue_pending_as_expired(
        self, client, project, make_user, seed_invitation
    ):
        users = [await make_user() for _ in range(4)]
        await seed_invitation(project, users[0])
        await seed_invitation(project, users[1], status="ACCEPTED")
        await seed_invitation(project, users[2], status="REJECTED")
        await seed_invitation(project, users[3], overdue=True)

        response = await client.get(f"/api/invitations/stats/{project.id}")

        assert response.json()["data"] == {
            "total": 4,
            "pending": 1,
            "accepted": 1,
            "rejected": 1,
            "expired": 1,
        }

    async def test_stats_for_unknown_project_is_not_found(self, client):
        response = await client.get("/api/invitations/stats/0123456789abcdef01234567")

        assert response.status_code == 404


class TestExpireSweep:
    async def test_sweep_expires_only_overdue_invitations(
        self, client, project, make_user, seed_invitation
    ):
        late = await make_user()
        fresh = await make_user()
        overdue = await seed_invitation(project, late, overdue=True)
        current = await seed_invitation(project, fresh)

        response = await client.post("/api/invitations/expire")

        assert response.status_code == 200
        assert response.json()["data"] == {"expired": 1}
        assert (await client.get(f"/api/invitations/{overdue.id}")).json()["data"][
            "status"
        ] == "EXPIRED"
        assert (await client.get(f"/api/invitations/{current.id}")).json()["data"][
            "status"
        ] == "PENDING"
        detail = (await client.get(f"/api/projects/{project.id}")).json()["data"]
        assert [u["id"] for u in detail["invitedUsers"]] == [fresh.id]

    async def test_second_sweep_finds_nothing(self, client, project, other_user, seed_invitation):
        await seed_invitation(project, other_user, overdue=True)
        await client.post("/api/invitations/expire")

        response = await client.post("/api/invitations/expire")

        assert response.json()["data"] == {"expired": 0}
