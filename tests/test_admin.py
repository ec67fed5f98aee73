import pytest
from bson import ObjectId

from skillup.admin import admin_service
from skillup.common.models import ApplicationStatus


class FailingCollection:
    def __init__(self, collection):
        self._collection = collection

    async def update_one(self, *args, **kwargs):
        raise RuntimeError("write failed")

    def __getattr__(self, name):
        return getattr(self._collection, name)


class FailingUsersDB:
    """Database wrapper whose `users` writes always fail"""

    def __init__(self, db):
        self._db = db

    def __getitem__(self, name):
        collection = self._db[name]
        if name == "users":
            return FailingCollection(collection)
        return collection


async def test_user_listing_and_case_insensitive_search(auth_client, db):
    await db["users"].insert_many([
        {"email": "maya@skillup.io", "username": "MayaK"},
        {"email": "ravi@skillup.io", "username": "ravi"},
        {"email": "sam@other.io", "username": "sam"},
    ])

    everyone = await auth_client.get("/users")
    assert len(everyone.json()) == 3

    by_name = await auth_client.get("/users", params={"searchTerm": "maya"})
    assert [u["email"] for u in by_name.json()] == ["maya@skillup.io"]

    by_email = await auth_client.get("/users", params={"searchTerm": "SKILLUP"})
    assert len(by_email.json()) == 2


async def test_user_search_treats_term_literally(auth_client, db):
    await db["users"].insert_many([
        {"email": "maya@skillup.io", "username": "maya"},
        {"email": "m.y@skillup.io", "username": "m.y"},
    ])

    response = await auth_client.get("/users", params={"searchTerm": "m.y"})

    assert [u["email"] for u in response.json()] == ["m.y@skillup.io"]


async def test_profile(auth_client, db):
    await db["users"].insert_one({"email": "maya@skillup.io", "role": "student"})

    missing_param = await auth_client.get("/profile")
    assert missing_param.status_code == 400

    unknown = await auth_client.get("/profile", params={"email": "nobody@skillup.io"})
    assert unknown.status_code == 404

    found = await auth_client.get("/profile", params={"email": "maya@skillup.io"})
    assert found.json()["role"] == "student"


async def test_update_user_to_teacher_approves_application(auth_client, db):
    await db["users"].insert_one({"email": "ravi@skillup.io", "role": "student"})
    await db["teachers"].insert_one({"email": "ravi@skillup.io", "status": "pending"})

    response = await auth_client.put("/users/update/ravi@skillup.io", json={"role": "teacher", "name": "Ravi"})

    assert response.status_code == 200
    user = await db["users"].find_one({"email": "ravi@skillup.io"})
    application = await db["teachers"].find_one({"email": "ravi@skillup.io"})
    assert user["role"] == "teacher"
    assert user["name"] == "Ravi"
    assert application["status"] == "approve"


async def test_update_user_upserts_both_sides(auth_client, db):
    response = await auth_client.put("/users/update/new@skillup.io", json={"role": "student"})

    assert response.json()["upsertedId"] is not None
    assert (await db["users"].find_one({"email": "new@skillup.io"}))["role"] == "student"
    assert (await db["teachers"].find_one({"email": "new@skillup.io"}))["status"] == "pending"


async def test_update_user_to_admin_leaves_application_alone(auth_client, db):
    await db["teachers"].insert_one({"email": "ravi@skillup.io", "status": "reject"})

    await auth_client.put("/users/update/ravi@skillup.io", json={"role": "admin"})

    assert (await db["users"].find_one({"email": "ravi@skillup.io"}))["role"] == "admin"
    assert (await db["teachers"].find_one({"email": "ravi@skillup.io"}))["status"] == "reject"


async def test_update_user_rolls_back_application_when_user_write_fails(db):
    await db["teachers"].insert_one({"email": "ravi@skillup.io", "status": "reject"})

    with pytest.raises(RuntimeError):
        await admin_service.update_user(FailingUsersDB(db), "ravi@skillup.io", {"role": "teacher"})

    application = await db["teachers"].find_one({"email": "ravi@skillup.io"})
    assert application["status"] == "reject"


async def test_update_user_removes_upserted_application_when_user_write_fails(db):
    with pytest.raises(RuntimeError):
        await admin_service.update_user(FailingUsersDB(db), "new@skillup.io", {"role": "teacher"})

    assert await db["teachers"].count_documents({"email": "new@skillup.io"}) == 0


async def test_teacher_requests_listing(auth_client, db):
    await db["teachers"].insert_many([
        {"email": "a@skillup.io", "status": "pending"},
        {"email": "b@skillup.io", "status": "approve"},
    ])

    response = await auth_client.get("/teachers/requests")

    assert len(response.json()) == 2


async def test_approving_twice_keeps_teacher_role(auth_client, db):
    await db["users"].insert_one({"email": "ravi@skillup.io", "role": "student"})
    result = await db["teachers"].insert_one({"email": "ravi@skillup.io", "status": "pending"})
    application_id = str(result.inserted_id)

    for _ in range(2):
        response = await auth_client.put(f"/teachers/update-status/{application_id}", json={"status": "approve"})
        assert response.status_code == 200
        assert response.json() == {"message": "Status updated successfully"}
        user = await db["users"].find_one({"email": "ravi@skillup.io"})
        assert user["role"] == "teacher"


async def test_rejecting_demotes_to_student(auth_client, db):
    await db["users"].insert_one({"email": "ravi@skillup.io", "role": "teacher"})
    result = await db["teachers"].insert_one({"email": "ravi@skillup.io", "status": "approve"})

    await auth_client.put(f"/teachers/update-status/{result.inserted_id}", json={"status": "reject"})

    assert (await db["users"].find_one({"email": "ravi@skillup.io"}))["role"] == "student"
    assert (await db["teachers"].find_one({"_id": result.inserted_id}))["status"] == "reject"


async def test_review_rejects_bad_input(auth_client):
    malformed = await auth_client.put("/teachers/update-status/xyz", json={"status": "approve"})
    assert malformed.status_code == 400

    unknown = await auth_client.put(f"/teachers/update-status/{ObjectId()}", json={"status": "approve"})
    assert unknown.status_code == 404

    bad_status = await auth_client.put(f"/teachers/update-status/{ObjectId()}", json={"status": "maybe"})
    assert bad_status.status_code == 422


async def test_review_restores_status_when_role_cascade_fails(db):
    result = await db["teachers"].insert_one({"email": "ravi@skillup.io", "status": "pending"})

    with pytest.raises(RuntimeError):
        await admin_service.review_application(FailingUsersDB(db), str(result.inserted_id), ApplicationStatus.APPROVE)

    assert (await db["teachers"].find_one({"_id": result.inserted_id}))["status"] == "pending"


async def test_class_status_update(auth_client, db):
    result = await db["classes"].insert_one({"classTitle": "Go", "status": "pending"})

    response = await auth_client.patch(f"/classes/update-status/{result.inserted_id}", json={"status": "approve"})

    assert response.json()["modifiedCount"] == 1
    assert (await db["classes"].find_one({"_id": result.inserted_id}))["status"] == "approve"

    unknown = await auth_client.patch(f"/classes/update-status/{ObjectId()}", json={"status": "approve"})
    assert unknown.status_code == 404


async def test_class_patch_only_applies_allowed_fields(auth_client, db):
    result = await db["classes"].insert_one({"classTitle": "Go", "price": 10, "enroll": 3, "status": "approve"})

    response = await auth_client.patch(f"/classes/update/{result.inserted_id}", json={
        "updateData": {"classTitle": "Go in depth", "price": 25, "enroll": 9000, "status": "pending"}
    })

    assert response.status_code == 200
    stored = await db["classes"].find_one({"_id": result.inserted_id})
    assert stored["classTitle"] == "Go in depth"
    assert stored["price"] == 25
    assert stored["enroll"] == 3
    assert stored["status"] == "approve"


async def test_class_patch_errors(auth_client, db):
    result = await db["classes"].insert_one({"classTitle": "Go"})

    empty = await auth_client.patch(f"/classes/update/{result.inserted_id}", json={"updateData": {}})
    assert empty.status_code == 400

    malformed = await auth_client.patch("/classes/update/nope", json={"updateData": {"price": 1}})
    assert malformed.status_code == 400

    unknown = await auth_client.patch(f"/classes/update/{ObjectId()}", json={"updateData": {"price": 1}})
    assert unknown.status_code == 404


async def test_delete_class_then_fetch_is_not_found(auth_client, db):
    result = await db["classes"].insert_one({"classTitle": "Go"})
    await db["classes"].insert_one({"classTitle": "Keep me"})
    class_id = str(result.inserted_id)

    deleted = await auth_client.delete(f"/classes/{class_id}")
    assert deleted.status_code == 200
    assert await db["classes"].count_documents({}) == 1

    fetched = await auth_client.get(f"/classes/single/{class_id}")
    assert fetched.status_code == 404

    again = await auth_client.delete(f"/classes/{class_id}")
    assert again.status_code == 404


async def test_delete_class_with_malformed_id(auth_client):
    response = await auth_client.delete("/classes/not-an-id")
    assert response.status_code == 400


async def test_delete_class_requires_auth(client, db):
    result = await db["classes"].insert_one({"classTitle": "Go"})

    response = await client.delete(f"/classes/{result.inserted_id}")

    assert response.status_code == 401
    assert await db["classes"].count_documents({}) == 1


async def test_feedback_for_one_class(auth_client, db):
    await db["feedbacks"].insert_many([
        {"classId": "class-1", "feedback": "good"},
        {"classId": "class-2", "feedback": "meh"},
    ])

    response = await auth_client.get("/feedbacks/class-1")

    assert [f["feedback"] for f in response.json()] == ["good"]
