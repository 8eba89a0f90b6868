"""
Hotel-scoped routes: dashboard gate, rooms, front-desk bookings, staff and logs.
"""
import uuid

import pytest

from hotelhub.models import Booking, UserRole

API = "/api/v1"

ACCESS_DENIED = {"error": "access_denied", "message": "Access denied"}


def desk_booking(room, check_in="2030-06-10T14:00:00Z", check_out="2030-06-12T11:00:00Z"):
    return {
        "room_id": str(room.id),
        "check_in": check_in,
        "check_out": check_out,
        "guest_name": "Walk In",
        "guest_email": "walkin@example.com",
    }


class TestDashboardGate:

    def dashboard(self, client, headers, slug, segment):
        return client.get(f"{API}/hotels/by-slug/{slug}/dashboards/{segment}", headers=headers)

    def test_front_desk_other_hotel_owner_dashboard(self, client, hotel_b, front_desk_a, auth_headers):
        response = self.dashboard(client, auth_headers(front_desk_a), "bravo", "owner")
        assert response.status_code == 403
        assert response.json() == ACCESS_DENIED

    def test_front_desk_own_dashboard(self, client, front_desk_a, auth_headers):
        response = self.dashboard(client, auth_headers(front_desk_a), "alpha", "frontdesk")
        assert response.status_code == 200
        assert response.json()["scope"] == "front_desk"
        assert response.json()["hotel_slug"] == "alpha"

    def test_front_desk_accounting_dashboard(self, client, front_desk_a, auth_headers):
        response = self.dashboard(client, auth_headers(front_desk_a), "alpha", "accounting")
        assert response.status_code == 403
        assert response.json() == ACCESS_DENIED

    @pytest.mark.parametrize("segment", ["owner", "frontdesk", "housekeeping", "maintenance", "accounting", "pos"])
    def test_owner_reaches_every_dashboard(self, client, owner_a, auth_headers, segment):
        response = self.dashboard(client, auth_headers(owner_a), "alpha", segment)
        assert response.status_code == 200

    def test_manager_uses_manager_segment(self, client, hotel_a, make_user, auth_headers):
        manager = make_user(UserRole.HOTEL_MANAGER, hotel_a)
        headers = auth_headers(manager)

        owner_only = self.dashboard(client, headers, "alpha", "owner")
        assert owner_only.status_code == 403
        assert owner_only.json() == ACCESS_DENIED

        managed = self.dashboard(client, headers, "alpha", "manager")
        assert managed.status_code == 200
        assert managed.json()["scope"] == "owner"

    def test_unknown_hotel_looks_like_foreign_hotel(self, client, front_desk_a, hotel_b, auth_headers):
        missing = self.dashboard(client, auth_headers(front_desk_a), "does-not-exist", "owner")
        foreign = self.dashboard(client, auth_headers(front_desk_a), "bravo", "owner")
        assert missing.status_code == foreign.status_code == 403
        assert missing.json() == foreign.json()

    def test_platform_admin(self, client, super_admin, hotel_b, auth_headers):
        assert self.dashboard(client, auth_headers(super_admin), "bravo", "accounting").status_code == 200
        assert self.dashboard(client, auth_headers(super_admin), "nope", "owner").status_code == 404

    def test_unknown_segment(self, client, owner_a, auth_headers):
        assert self.dashboard(client, auth_headers(owner_a), "alpha", "spa").status_code == 404

    def test_anonymous(self, client, hotel_a):
        response = client.get(f"{API}/hotels/by-slug/alpha/dashboards/owner")
        assert response.status_code == 401
        assert response.json()["error"] == "unauthenticated"


class TestHotelSettings:

    def test_owner_updates_profile(self, client, hotel_a, owner_a, auth_headers):
        response = client.patch(
            f"{API}/hotels/{hotel_a.id}",
            json={"phone": "+234 1 234", "domain": "Alpha-Resort.COM"},
            headers=auth_headers(owner_a),
        )
        assert response.status_code == 200
        assert response.json()["domain"] == "alpha-resort.com"
        assert response.json()["slug"] == "alpha"

    def test_manager_cannot_update_settings(self, client, hotel_a, make_user, auth_headers):
        manager = make_user(UserRole.HOTEL_MANAGER, hotel_a)
        response = client.patch(f"{API}/hotels/{hotel_a.id}", json={"name": "X"}, headers=auth_headers(manager))
        assert response.status_code == 403

    def test_domain_in_use(self, client, hotel_a, hotel_b, make_user, auth_headers):
        owner_b = make_user(UserRole.HOTEL_OWNER, hotel_b)
        response = client.patch(
            f"{API}/hotels/{hotel_b.id}", json={"domain": "alpha-hotel.com"}, headers=auth_headers(owner_b)
        )
        assert response.status_code == 409

    @pytest.mark.parametrize("field", ["name", "status", "currency", "default_language"])
    def test_required_fields_cannot_be_nulled(self, client, db_session, hotel_a, owner_a, auth_headers, field):
        response = client.patch(f"{API}/hotels/{hotel_a.id}", json={field: None}, headers=auth_headers(owner_a))
        assert response.status_code == 422

        db_session.refresh(hotel_a)
        assert hotel_a.name == "Hotel Alpha"

    def test_blank_name_rejected(self, client, hotel_a, owner_a, auth_headers):
        response = client.patch(f"{API}/hotels/{hotel_a.id}", json={"name": "  "}, headers=auth_headers(owner_a))
        assert response.status_code == 422

    def test_empty_domain_clears_it(self, client, hotel_a, hotel_b, make_user, owner_a, auth_headers):
        cleared = client.patch(f"{API}/hotels/{hotel_a.id}", json={"domain": ""}, headers=auth_headers(owner_a))
        assert cleared.status_code == 200
        assert cleared.json()["domain"] is None

        owner_b = make_user(UserRole.HOTEL_OWNER, hotel_b)
        response = client.patch(f"{API}/hotels/{hotel_b.id}", json={"domain": ""}, headers=auth_headers(owner_b))
        assert response.status_code == 200
        assert response.json()["domain"] is None

    def test_staff_can_read_own_hotel_only(self, client, hotel_a, hotel_b, housekeeping_a, auth_headers):
        assert client.get(f"{API}/hotels/{hotel_a.id}", headers=auth_headers(housekeeping_a)).status_code == 200
        assert client.get(f"{API}/hotels/{hotel_b.id}", headers=auth_headers(housekeeping_a)).status_code == 403


class TestRooms:

    def test_owner_creates_room(self, client, hotel_a, owner_a, auth_headers):
        payload = {"number": "201", "type": "deluxe", "price": "120.00"}
        response = client.post(f"{API}/hotels/{hotel_a.id}/rooms/", json=payload, headers=auth_headers(owner_a))
        assert response.status_code == 201
        assert response.json()["status"] == "available"

        duplicate = client.post(f"{API}/hotels/{hotel_a.id}/rooms/", json=payload, headers=auth_headers(owner_a))
        assert duplicate.status_code == 409

    def test_unknown_hotel(self, client, super_admin, auth_headers):
        payload = {"number": "201", "type": "deluxe", "price": "120.00"}
        response = client.post(f"{API}/hotels/{uuid.uuid4()}/rooms/", json=payload, headers=auth_headers(super_admin))
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_front_desk_cannot_create_room(self, client, hotel_a, front_desk_a, auth_headers):
        payload = {"number": "201", "type": "deluxe", "price": "120.00"}
        response = client.post(f"{API}/hotels/{hotel_a.id}/rooms/", json=payload, headers=auth_headers(front_desk_a))
        assert response.status_code == 403

    def test_housekeeping_updates_status(self, client, hotel_a, room, housekeeping_a, auth_headers):
        response = client.patch(
            f"{API}/hotels/{hotel_a.id}/rooms/{room.id}/status",
            json={"status": "maintenance"},
            headers=auth_headers(housekeeping_a),
        )
        assert response.status_code == 200
        assert response.json()["status"] == "maintenance"

    def test_list_rooms_other_tenant(self, client, hotel_a, room, front_desk_b, auth_headers):
        response = client.get(f"{API}/hotels/{hotel_a.id}/rooms/", headers=auth_headers(front_desk_b))
        assert response.status_code == 403
        assert response.json() == ACCESS_DENIED


class TestFrontDeskBookings:

    def test_booking_lifecycle(self, client, db_session, hotel_a, room, front_desk_a, auth_headers):
        headers = auth_headers(front_desk_a)
        base = f"{API}/hotels/{hotel_a.id}/bookings"

        created = client.post(f"{base}/", json=desk_booking(room), headers=headers)
        assert created.status_code == 201
        booking_id = created.json()["id"]

        confirmed = client.post(
            f"{base}/{booking_id}/confirm",
            json={"payment_method": "cash", "payment_reference": "RCPT-1"},
            headers=headers,
        )
        assert confirmed.status_code == 200
        assert confirmed.json()["status"] == "confirmed"
        assert confirmed.json()["payment_status"] == "paid"

        again = client.post(f"{base}/{booking_id}/confirm", headers=headers)
        assert again.status_code == 409
        assert again.json()["error"] == "invalid_state"

        checked_out = client.post(f"{base}/{booking_id}/check-out", headers=headers)
        assert checked_out.status_code == 200
        assert checked_out.json()["status"] == "completed"

        booking = db_session.query(Booking).one()
        assert booking.created_by == front_desk_a.id

    def test_cancel_releases_room(self, client, hotel_a, room, front_desk_a, auth_headers):
        headers = auth_headers(front_desk_a)
        base = f"{API}/hotels/{hotel_a.id}/bookings"

        booking_id = client.post(f"{base}/", json=desk_booking(room), headers=headers).json()["id"]
        assert client.post(f"{base}/", json=desk_booking(room), headers=headers).status_code == 409

        cancelled = client.post(f"{base}/{booking_id}/cancel", headers=headers)
        assert cancelled.json()["status"] == "cancelled"
        assert client.post(f"{base}/", json=desk_booking(room), headers=headers).status_code == 201

    def test_list_filters_by_status(self, client, hotel_a, room, other_room, front_desk_a, auth_headers):
        headers = auth_headers(front_desk_a)
        base = f"{API}/hotels/{hotel_a.id}/bookings"
        first = client.post(f"{base}/", json=desk_booking(room), headers=headers).json()
        client.post(f"{base}/", json=desk_booking(other_room), headers=headers)
        client.post(f"{base}/{first['id']}/confirm", headers=headers)

        page = client.get(f"{base}/", params={"status": "confirmed"}, headers=headers).json()
        assert page["total"] == 1
        assert page["data"][0]["id"] == first["id"]

        everything = client.get(f"{base}/", headers=headers).json()
        assert everything["total"] == 2

    def test_other_tenant_cannot_touch_bookings(self, client, hotel_a, room, front_desk_a, front_desk_b, auth_headers):
        base = f"{API}/hotels/{hotel_a.id}/bookings"
        booking_id = client.post(f"{base}/", json=desk_booking(room), headers=auth_headers(front_desk_a)).json()["id"]

        response = client.post(f"{base}/{booking_id}/confirm", headers=auth_headers(front_desk_b))
        assert response.status_code == 403
        assert response.json() == ACCESS_DENIED

    def test_housekeeping_cannot_book(self, client, hotel_a, room, housekeeping_a, auth_headers):
        response = client.post(
            f"{API}/hotels/{hotel_a.id}/bookings/", json=desk_booking(room), headers=auth_headers(housekeeping_a)
        )
        assert response.status_code == 403


class TestStaff:

    def staff_payload(self, role="FRONT_DESK", email="desk2@example.com"):
        return {"email": email, "full_name": "New Staff", "role": role, "pin_code": "4321"}

    def test_owner_adds_staff(self, client, db_session, hotel_a, owner_a, auth_headers):
        response = client.post(
            f"{API}/hotels/{hotel_a.id}/staff/", json=self.staff_payload(), headers=auth_headers(owner_a)
        )
        assert response.status_code == 201
        data = response.json()
        assert data["role"] == "FRONT_DESK"
        assert data["hotel_id"] == str(hotel_a.id)
        assert data["force_password_reset"] is True

        login = client.post(f"{API}/auth/login", data={"username": "desk2@example.com", "password": "4321"})
        assert login.status_code == 200

    def test_first_password_change_clears_reset_flag(self, client, hotel_a, owner_a, auth_headers):
        client.post(f"{API}/hotels/{hotel_a.id}/staff/", json=self.staff_payload(), headers=auth_headers(owner_a))
        login = client.post(f"{API}/auth/login", data={"username": "desk2@example.com", "password": "4321"}).json()
        assert login["user"]["force_password_reset"] is True
        headers = {"Authorization": f"Bearer {login['access_token']}"}

        wrong = client.post(
            f"{API}/me/password",
            json={"current_password": "0000", "new_password": "counter-42"},
            headers=headers,
        )
        assert wrong.status_code == 400

        changed = client.post(
            f"{API}/me/password",
            json={"current_password": "4321", "new_password": "counter-42"},
            headers=headers,
        )
        assert changed.status_code == 200
        assert changed.json()["force_password_reset"] is False

        old = client.post(f"{API}/auth/login", data={"username": "desk2@example.com", "password": "4321"})
        assert old.status_code == 401
        new = client.post(f"{API}/auth/login", data={"username": "desk2@example.com", "password": "counter-42"})
        assert new.status_code == 200
        assert new.json()["user"]["force_password_reset"] is False

    def test_staff_cannot_be_platform_role(self, client, hotel_a, owner_a, auth_headers):
        response = client.post(
            f"{API}/hotels/{hotel_a.id}/staff/",
            json=self.staff_payload(role="SUPER_ADMIN"),
            headers=auth_headers(owner_a),
        )
        assert response.status_code == 400

    def test_manager_cannot_create_manager(self, client, hotel_a, make_user, auth_headers):
        manager = make_user(UserRole.HOTEL_MANAGER, hotel_a)
        response = client.post(
            f"{API}/hotels/{hotel_a.id}/staff/",
            json=self.staff_payload(role="HOTEL_MANAGER"),
            headers=auth_headers(manager),
        )
        assert response.status_code == 403

    def test_staff_limit(self, client, db_session, hotel_a, owner_a, auth_headers):
        hotel_a.max_staff = 1
        db_session.commit()

        response = client.post(
            f"{API}/hotels/{hotel_a.id}/staff/", json=self.staff_payload(), headers=auth_headers(owner_a)
        )
        assert response.status_code == 409

    def test_remove_staff(self, client, db_session, hotel_a, owner_a, front_desk_a, auth_headers):
        headers = auth_headers(owner_a)
        response = client.delete(f"{API}/hotels/{hotel_a.id}/staff/{front_desk_a.id}", headers=headers)
        assert response.status_code == 204

        listed = client.get(f"{API}/hotels/{hotel_a.id}/staff/", headers=headers).json()
        assert [u["id"] for u in listed] == [str(owner_a.id)]

        # Removed accounts can no longer authenticate.
        assert client.get(f"{API}/me/", headers=auth_headers(front_desk_a)).status_code == 401

    def test_owner_cannot_be_removed(self, client, hotel_a, owner_a, auth_headers):
        response = client.delete(f"{API}/hotels/{hotel_a.id}/staff/{owner_a.id}", headers=auth_headers(owner_a))
        assert response.status_code == 400


class TestOperationalLogs:

    def test_generator_log(self, client, hotel_a, make_user, auth_headers):
        maintenance = make_user(UserRole.MAINTENANCE, hotel_a)
        headers = auth_headers(maintenance)
        base = f"{API}/hotels/{hotel_a.id}/generator-logs"

        created = client.post(
            f"{base}/",
            json={"log_type": "FUEL_PURCHASE", "fuel_amount": "50", "cost_per_liter": "700", "supplier": "Total"},
            headers=headers,
        )
        assert created.status_code == 201
        assert created.json()["total_cost"] == "35000.00"
        assert created.json()["recorded_by"] == str(maintenance.id)

        page = client.get(f"{base}/", headers=headers).json()
        assert page["total"] == 1

    def test_front_desk_cannot_log_generator(self, client, hotel_a, front_desk_a, auth_headers):
        response = client.post(
            f"{API}/hotels/{hotel_a.id}/generator-logs/",
            json={"log_type": "USAGE", "hours_run": "3"},
            headers=auth_headers(front_desk_a),
        )
        assert response.status_code == 403

    def test_attendance(self, client, hotel_a, housekeeping_a, make_user, auth_headers):
        headers = auth_headers(housekeeping_a)
        base = f"{API}/hotels/{hotel_a.id}/attendance"

        assert client.post(f"{base}/punch-out", headers=headers).status_code == 409
        assert client.post(f"{base}/punch-in", headers=headers).status_code == 201
        assert client.post(f"{base}/punch-in", headers=headers).status_code == 409

        punched_out = client.post(f"{base}/punch-out", headers=headers)
        assert punched_out.status_code == 200
        assert punched_out.json()["punch_out"] is not None

        accountant = make_user(UserRole.ACCOUNTING, hotel_a)
        page = client.get(f"{base}/", headers=auth_headers(accountant)).json()
        assert page["total"] == 1
        assert page["data"][0]["user_id"] == str(housekeeping_a.id)

        assert client.get(f"{base}/", headers=headers).status_code == 403
