from sqlalchemy.exc import OperationalError

from luxe_estate.models.notification import Notification, NotificationType
from luxe_estate.services.notifications import notify, notify_admins


class StaticDirectory:
    def __init__(self, ids):
        self.ids = ids

    def admin_ids(self):
        return list(self.ids)


class FailingSession:
    def __init__(self):
        self.rolled_back = False

    def add(self, obj):
        pass

    def commit(self):
        raise OperationalError("INSERT INTO notifications", {}, Exception("database is locked"))

    def rollback(self):
        self.rolled_back = True


class TestNotify:
    def test_persists_with_defaults(self, db, buyer):
        notification = notify(db, buyer.id, "Welcome", "Thanks for joining")
        assert notification is not None
        assert notification.type == NotificationType.info
        assert notification.is_read is False
        assert notification.link == ""
        assert db.query(Notification).count() == 1

    def test_persistence_failure_is_swallowed(self):
        session = FailingSession()
        assert notify(session, 1, "Title", "Body") is None
        assert session.rolled_back is True

    def test_fans_out_to_every_listed_admin(self, db, make_user):
        first = make_user("Admin One", "one@example.com")
        second = make_user("Admin Two", "two@example.com")
        sent = notify_admins(db, StaticDirectory([first.id, second.id]), "Heads up", "Something happened", link="/admin")
        assert sorted(n.user_id for n in sent) == sorted([first.id, second.id])
        assert all(n.link == "/admin" for n in sent)

    def test_empty_directory_sends_nothing(self, db):
        assert notify_admins(db, StaticDirectory([]), "Heads up", "Nobody home") == []


class TestEndpoints:
    def test_lists_own_notifications_newest_first(self, client, db, buyer, agent, auth_headers):
        notify(db, buyer.id, "First", "one")
        notify(db, buyer.id, "Second", "two")
        notify(db, agent.id, "Not yours", "three")

        body = client.get("/api/notifications", headers=auth_headers(buyer)).json()
        assert [n["title"] for n in body] == ["Second", "First"]
        assert body[0]["isRead"] is False
        assert body[0]["userId"] == buyer.id

    def test_mark_read(self, client, db, buyer, auth_headers):
        notification = notify(db, buyer.id, "Ping", "pong")
        resp = client.put(f"/api/notifications/{notification.id}/read", headers=auth_headers(buyer))
        assert resp.status_code == 200
        assert resp.json()["isRead"] is True

    def test_cannot_mark_someone_elses(self, client, db, admin, buyer, auth_headers):
        notification = notify(db, buyer.id, "Ping", "pong")
        resp = client.put(f"/api/notifications/{notification.id}/read", headers=auth_headers(admin))
        assert resp.status_code == 403

    def test_unknown_notification(self, client, buyer, auth_headers):
        assert client.put("/api/notifications/999/read", headers=auth_headers(buyer)).status_code == 404

    def test_mark_all_read(self, client, db, buyer, agent, auth_headers):
        notify(db, buyer.id, "One", "1")
        notify(db, buyer.id, "Two", "2")
        other = notify(db, agent.id, "Three", "3")

        resp = client.put("/api/notifications/read-all", headers=auth_headers(buyer))
        assert resp.json()["updated"] == 2
        assert all(n["isRead"] for n in client.get("/api/notifications", headers=auth_headers(buyer)).json())
        db.refresh(other)
        assert other.is_read is False
