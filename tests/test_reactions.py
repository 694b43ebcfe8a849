import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from socialfeed.core.errors import NotFound, ServerError
from socialfeed.modules.posts.models.post import Post
from socialfeed.modules.posts.reactions.models.reaction import Reaction
from socialfeed.modules.posts.reactions.services import reaction as reaction_service
from socialfeed.modules.user_management.services.user import get_user_by_email

from conftest import create_post


def _toggle(client, post_id, headers):
    return client.post(f"/api/posts/{post_id}/reaction", headers=headers)


def test_toggle_twice_restores_original_count(client, alice, bob) -> None:
    _, alice_headers = alice
    _, bob_headers = bob
    post = create_post(client, alice_headers)

    liked = _toggle(client, post["id"], bob_headers)
    assert liked.status_code == 200
    assert liked.json() == {"message": "Reaction liked", "status": "liked", "reactionCount": 1}

    unliked = _toggle(client, post["id"], bob_headers)
    assert unliked.json() == {"message": "Reaction unliked", "status": "unliked", "reactionCount": 0}


def test_counts_reactions_from_different_users(client, alice, bob) -> None:
    _, alice_headers = alice
    _, bob_headers = bob
    post = create_post(client, alice_headers)

    _toggle(client, post["id"], alice_headers)
    response = _toggle(client, post["id"], bob_headers)
    assert response.json()["reactionCount"] == 2


def test_toggle_rejects_malformed_post_id(client, alice) -> None:
    _, headers = alice
    response = _toggle(client, "not-a-valid-id", headers)
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid post ID"}


def test_toggle_on_missing_post(client, alice) -> None:
    _, headers = alice
    response = _toggle(client, str(uuid.uuid4()), headers)
    assert response.status_code == 404


def test_toggle_requires_token(client, alice) -> None:
    _, headers = alice
    post = create_post(client, headers)
    assert client.post(f"/api/posts/{post['id']}/reaction").status_code == 401


def test_storage_rejects_duplicate_reaction(client, db, alice) -> None:
    user, headers = alice
    post = create_post(client, headers)

    db.add(Reaction(id=str(uuid.uuid4()), post_id=post["id"], user_id=user["id"]))
    db.commit()
    db.add(Reaction(id=str(uuid.uuid4()), post_id=post["id"], user_id=user["id"]))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_concurrent_insert_is_retried_not_surfaced(client, app, db, alice, monkeypatch) -> None:
    user, headers = alice
    post = create_post(client, headers)

    # Another request likes the post after our read but before our insert
    other = app.state.session_factory()
    other.add(Reaction(id=str(uuid.uuid4()), post_id=post["id"], user_id=user["id"]))
    other.commit()
    other.close()

    real_get_reaction = reaction_service.get_reaction
    reads = []

    def stale_first_read(session, user_id, post_id):
        reads.append(post_id)
        if len(reads) == 1:
            return None
        return real_get_reaction(session, user_id, post_id)

    monkeypatch.setattr(reaction_service, "get_reaction", stale_first_read)

    result = reaction_service.toggle_reaction(db, post["id"], user["id"])

    assert len(reads) == 2
    assert result.status == "unliked"
    assert result.reaction_count == 0
    assert db.query(Reaction).filter(Reaction.post_id == post["id"]).count() == 0


def test_concurrent_delete_is_retried(client, app, db, alice, monkeypatch) -> None:
    user, headers = alice
    post = create_post(client, headers)
    owner = get_user_by_email(db, user["email"])

    # A reaction we read but that a concurrent unlike removes before our delete
    phantom = Reaction(id=str(uuid.uuid4()), post_id=post["id"], user_id=owner.id)
    reads = []

    def vanished_first_read(session, user_id, post_id):
        reads.append(post_id)
        return phantom if len(reads) == 1 else None

    monkeypatch.setattr(reaction_service, "get_reaction", vanished_first_read)

    result = reaction_service.toggle_reaction(db, post["id"], owner.id)
    assert result.status == "liked"
    assert result.reaction_count == 1


def test_toggle_gives_up_after_max_attempts(client, db, alice, monkeypatch) -> None:
    user, headers = alice
    post = create_post(client, headers)

    monkeypatch.setattr(reaction_service, "get_reaction", lambda *args: None)
    monkeypatch.setattr(reaction_service, "_insert", lambda *args: False)

    with pytest.raises(ServerError):
        reaction_service.toggle_reaction(db, post["id"], user["id"], max_attempts=2)


def test_post_deleted_mid_toggle_is_not_found(client, app, db, alice, monkeypatch) -> None:
    user, headers = alice
    post = create_post(client, headers)
    attempts = []

    # The owner deletes the post after our existence check; the insert then fails on the foreign key
    def insert_after_delete(session, user_id, post_id):
        attempts.append(post_id)
        other = app.state.session_factory()
        other.query(Post).filter(Post.id == post_id).delete(synchronize_session=False)
        other.commit()
        other.close()
        return False

    monkeypatch.setattr(reaction_service, "_insert", insert_after_delete)

    with pytest.raises(NotFound):
        reaction_service.toggle_reaction(db, post["id"], user["id"])
    assert len(attempts) == 1


def test_repeated_toggles_never_duplicate(client, db, alice) -> None:
    user, headers = alice
    post = create_post(client, headers)

    for i in range(7):
        result = reaction_service.toggle_reaction(db, post["id"], user["id"])
        assert result.reaction_count in (0, 1)
        assert result.status == ("liked" if i % 2 == 0 else "unliked")
    assert db.query(Reaction).filter(Reaction.post_id == post["id"]).count() == 1
