from luxe_estate.api.routes.users import DEFAULT_REJECTION_REASON
from luxe_estate.models.user import SellerApplicationStatus, UserRole


class TestWishlist:
    def test_toggle_twice_round_trips(self, client, db, agent, buyer, make_property, auth_headers):
        prop = make_property(agent)
        headers = auth_headers(buyer)

        added = client.put(f"/api/users/wishlist/{prop.id}", headers=headers)
        assert added.status_code == 200
        assert added.json() == {"wishlist": [prop.id]}
        db.refresh(prop)
        assert prop.wishlist_count == 1

        removed = client.put(f"/api/users/wishlist/{prop.id}", headers=headers)
        assert removed.json() == {"wishlist": []}
        db.refresh(prop)
        assert prop.wishlist_count == 0

    def test_count_never_goes_negative(self, client, db, agent, buyer, make_property, auth_headers):
        prop = make_property(agent)
        client.put(f"/api/users/wishlist/{prop.id}", headers=auth_headers(buyer))
        db.refresh(prop)
        prop.wishlist_count = 0
        db.commit()

        client.put(f"/api/users/wishlist/{prop.id}", headers=auth_headers(buyer))
        db.refresh(prop)
        assert prop.wishlist_count == 0

    def test_wishlist_lists_newest_first(self, client, agent, buyer, make_property, auth_headers):
        first = make_property(agent, title="First Home")
        second = make_property(agent, title="Second Home")
        client.put(f"/api/users/wishlist/{first.id}", headers=auth_headers(buyer))
        client.put(f"/api/users/wishlist/{second.id}", headers=auth_headers(buyer))
        titles = [p["title"] for p in client.get("/api/users/wishlist", headers=auth_headers(buyer)).json()]
        assert titles == ["Second Home", "First Home"]

    def test_unknown_property(self, client, buyer, auth_headers):
        assert client.put("/api/users/wishlist/404", headers=auth_headers(buyer)).status_code == 404


class TestProfile:
    def test_read_and_update(self, client, buyer, auth_headers):
        assert client.get("/api/users/profile", headers=auth_headers(buyer)).json()["name"] == "Bea Buyer"
        resp = client.put(
            "/api/users/profile",
            json={"name": "Beatrice", "receivePushNotifications": False},
            headers=auth_headers(buyer),
        )
        assert resp.json()["name"] == "Beatrice"
        assert resp.json()["receivePushNotifications"] is False


class TestSellerApplication:
    def test_apply_marks_pending_and_alerts_admins(self, client, admin, buyer, auth_headers, notifications_for):
        resp = client.post("/api/users/apply-seller", headers=auth_headers(buyer))
        assert resp.status_code == 200
        assert resp.json()["sellerApplicationStatus"] == "pending"
        assert resp.json()["token"]
        assert len(notifications_for(admin, "New Seller Application")) == 1

    def test_agents_cannot_apply(self, client, agent, auth_headers):
        assert client.post("/api/users/apply-seller", headers=auth_headers(agent)).status_code == 400

    def test_soft_deleted_admins_are_not_alerted(self, client, make_user, buyer, auth_headers, notifications_for):
        retired = make_user("Retired Admin", "retired@example.com", UserRole.admin, is_deleted=True)
        client.post("/api/users/apply-seller", headers=auth_headers(buyer))
        assert notifications_for(retired) == []

    def test_rejection_without_reason_uses_fallback(self, client, db, admin, make_user, auth_headers, notifications_for):
        applicant = make_user("Appl Icant", "applicant@example.com", seller_application_status=SellerApplicationStatus.pending)
        resp = client.put(f"/api/users/{applicant.id}/reject-seller", json={}, headers=auth_headers(admin))
        assert resp.status_code == 200

        db.refresh(applicant)
        assert applicant.seller_application_status == SellerApplicationStatus.rejected
        assert applicant.rejection_reason == DEFAULT_REJECTION_REASON
        rejected = notifications_for(applicant)
        assert len(rejected) == 1
        assert rejected[0].title == "Application Rejected"
        assert DEFAULT_REJECTION_REASON in rejected[0].message

    def test_rejection_without_body_uses_fallback(self, client, db, admin, make_user, auth_headers, notifications_for):
        applicant = make_user("Appl Icant", "applicant@example.com", seller_application_status=SellerApplicationStatus.pending)
        resp = client.put(f"/api/users/{applicant.id}/reject-seller", headers=auth_headers(admin))
        assert resp.status_code == 200

        db.refresh(applicant)
        assert applicant.seller_application_status == SellerApplicationStatus.rejected
        assert applicant.rejection_reason == DEFAULT_REJECTION_REASON
        assert len(notifications_for(applicant, "Application Rejected")) == 1

    def test_rejection_with_reason(self, client, db, admin, make_user, auth_headers):
        applicant = make_user("Appl Icant", "applicant@example.com", seller_application_status=SellerApplicationStatus.pending)
        client.put(f"/api/users/{applicant.id}/reject-seller", json={"reason": "Missing licence"}, headers=auth_headers(admin))
        db.refresh(applicant)
        assert applicant.rejection_reason == "Missing licence"

    def test_only_pending_applications_can_be_rejected(self, client, db, admin, agent, buyer, auth_headers, notifications_for):
        for user in (buyer, agent):
            resp = client.put(f"/api/users/{user.id}/reject-seller", json={}, headers=auth_headers(admin))
            assert resp.status_code == 400
            db.refresh(user)
            assert user.seller_application_status == SellerApplicationStatus.none
            assert notifications_for(user) == []

    def test_promotion_clears_application(self, client, admin, make_user, auth_headers):
        applicant = make_user("Appl Icant", "applicant@example.com", seller_application_status=SellerApplicationStatus.pending)
        resp = client.put(f"/api/users/{applicant.id}/role", json={"role": "agent"}, headers=auth_headers(admin))
        assert resp.status_code == 200
        assert resp.json()["role"] == "agent"
        assert resp.json()["sellerApplicationStatus"] == "none"

    def test_role_change_requires_admin(self, client, agent, buyer, auth_headers):
        resp = client.put(f"/api/users/{buyer.id}/role", json={"role": "agent"}, headers=auth_headers(agent))
        assert resp.status_code == 403


class TestAdministration:
    def test_admin_cannot_delete_self(self, client, admin, auth_headers):
        resp = client.delete(f"/api/users/{admin.id}", headers=auth_headers(admin))
        assert resp.status_code == 400

    def test_soft_delete_suspends_user(self, client, db, admin, buyer, auth_headers):
        assert client.delete(f"/api/users/{buyer.id}", headers=auth_headers(admin)).status_code == 200
        db.refresh(buyer)
        assert buyer.is_deleted is True
        assert client.get("/api/users/profile", headers=auth_headers(buyer)).status_code == 403

    def test_list_hides_deleted_users(self, client, admin, buyer, make_user, auth_headers):
        make_user("Gone", "gone@example.com", is_deleted=True)
        emails = {u["email"] for u in client.get("/api/users", headers=auth_headers(admin)).json()}
        assert emails == {"admin@example.com", "buyer@example.com"}

    def test_list_requires_admin(self, client, buyer, auth_headers):
        assert client.get("/api/users", headers=auth_headers(buyer)).status_code == 403

    def test_unknown_user(self, client, admin, auth_headers):
        assert client.delete("/api/users/999", headers=auth_headers(admin)).status_code == 404
