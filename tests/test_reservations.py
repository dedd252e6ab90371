import datetime

from sqlalchemy.orm import Session

from stayfinder import crud
from stayfinder.services import reservation_service


def test_get_reservations_by_author_attaches_reservation(
        db_session: Session, make_user, make_listing, make_reservation):
    host = make_user("host")
    guest = make_user("guest")
    listing = make_listing(host, title="Loft")
    reservation = make_reservation(listing, guest, datetime.date(2024, 6, 1), datetime.date(2024, 6, 3))

    page = reservation_service.get_reservations(db_session, {"authorId": host.id})

    assert len(page["listings"]) == 1
    item = page["listings"][0]
    assert item.id == listing.id
    assert item.title == "Loft"
    assert item.reservation.id == reservation.id
    assert item.reservation.user_id == guest.id
    assert page["next_cursor"] is None


def test_get_reservations_by_guest(db_session: Session, make_user, make_listing, make_reservation):
    host = make_user("host")
    guest = make_user("guest")
    other_guest = make_user("other")
    listing = make_listing(host)
    mine = make_reservation(listing, guest, datetime.date(2024, 6, 1), datetime.date(2024, 6, 3), minutes=1)
    make_reservation(listing, other_guest, datetime.date(2024, 7, 1), datetime.date(2024, 7, 3), minutes=2)

    page = reservation_service.get_reservations(db_session, {"userId": guest.id})

    assert [item.reservation.id for item in page["listings"]] == [mine.id]


def test_get_reservations_by_listing_newest_first(
        db_session: Session, make_user, make_listing, make_reservation):
    host = make_user("host")
    guest = make_user("guest")
    listing = make_listing(host)
    older = make_reservation(listing, guest, datetime.date(2024, 6, 1), datetime.date(2024, 6, 3), minutes=1)
    newer = make_reservation(listing, guest, datetime.date(2024, 8, 1), datetime.date(2024, 8, 3), minutes=2)

    page = reservation_service.get_reservations(db_session, {"listingId": listing.id})

    assert [item.reservation.id for item in page["listings"]] == [newer.id, older.id]


def test_get_reservations_cursor_walk(
        db_session: Session, make_user, make_listing, make_reservation, small_batch):
    host = make_user("host")
    guest = make_user("guest")
    listing = make_listing(host)
    for i in range(4):
        day = datetime.date(2024, 1, 1) + datetime.timedelta(days=10 * i)
        make_reservation(listing, guest, day, day + datetime.timedelta(days=2), minutes=i)

    first = reservation_service.get_reservations(db_session)
    second = reservation_service.get_reservations(db_session, {"cursor": first["next_cursor"]})

    first_ids = [item.reservation.id for item in first["listings"]]
    second_ids = [item.reservation.id for item in second["listings"]]
    assert len(first_ids) == 3
    assert len(second_ids) == 1
    assert not set(first_ids) & set(second_ids)
    assert second["next_cursor"] is None


def test_get_reservations_store_error_returns_empty_page(db_session: Session, mocker):
    mocker.patch.object(crud, "find_reservations", side_effect=RuntimeError("database is down"))

    page = reservation_service.get_reservations(db_session, {"authorId": "host"})

    assert page == {"listings": [], "next_cursor": None}


# --- Reservations page ---

def test_page_without_any_user_is_unauthorized(db_session: Session):
    view = reservation_service.render_reservations_page(db_session, None)

    assert view.empty_state.title == "Unauthorized"
    assert view.empty_state.subtitle == "Please login"
    assert view.listings == []


def test_page_without_reservations(db_session: Session, make_user, make_listing):
    host = make_user("host")
    make_listing(host)

    view = reservation_service.render_reservations_page(db_session, host)

    assert view.empty_state.title == "No reservations found"
    assert view.heading is None


def test_page_lists_bookings_on_current_users_properties(
        db_session: Session, make_user, make_listing, make_reservation):
    host = make_user("host")
    guest = make_user("guest")
    listing = make_listing(host)
    make_reservation(listing, guest, datetime.date(2024, 6, 1), datetime.date(2024, 6, 3))

    view = reservation_service.render_reservations_page(db_session, host)

    assert view.empty_state is None
    assert view.heading.title == "Reservations"
    assert [item.id for item in view.listings] == [listing.id]
    assert view.load_more is None


def test_page_explicit_user_id_wins_over_current_user(
        db_session: Session, make_user, make_listing, make_reservation):
    host = make_user("host")
    guest = make_user("guest")
    listing = make_listing(host)
    make_reservation(listing, guest, datetime.date(2024, 6, 1), datetime.date(2024, 6, 3))

    view = reservation_service.render_reservations_page(db_session, guest, user_id=host.id)

    assert [item.id for item in view.listings] == [listing.id]


def test_page_offers_load_more_when_page_is_full(
        db_session: Session, make_user, make_listing, make_reservation, small_batch):
    host = make_user("host")
    guest = make_user("guest")
    listing = make_listing(host)
    for i in range(3):
        day = datetime.date(2024, 1, 1) + datetime.timedelta(days=10 * i)
        make_reservation(listing, guest, day, day + datetime.timedelta(days=2), minutes=i)

    view = reservation_service.render_reservations_page(db_session, host)

    assert view.load_more is not None
    assert view.load_more.next_cursor == view.listings[-1].reservation.id
    assert view.load_more.fn_args == {"authorId": host.id}
    assert view.load_more.query_key == ["reservations", host.id]
