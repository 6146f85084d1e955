"""End-to-end lifecycle scenarios across the author, admin and public APIs."""

import re

from app.utils.enums import ArticleStatus as S


def test_writeup_lifecycle(test_client, author_headers, admin_headers, topic):
    # Create: always a draft with a timestamped slug
    r = test_client.post(
        "/api/articles",
        json={"title": "My First CTF Writeup", "topicId": topic["id"], "content": "flag{...}"},
        headers=author_headers,
    )
    assert r.status_code == 201
    article = r.json()["article"]
    assert article["status"] == "draft"
    assert re.fullmatch(r"my-first-ctf-writeup-\d+", article["slug"])
    aid = article["id"]

    # Submit
    r = test_client.patch(f"/api/articles/{aid}/submit", headers=author_headers)
    assert r.json()["article"]["status"] == "pending"
    assert r.json()["article"]["rejectionReason"] is None

    # pending -> published skips approval and is refused
    r = test_client.patch(
        f"/api/admin/articles/{aid}/status",
        json={"status": "published"},
        headers=admin_headers,
    )
    assert r.status_code == 400
    current = test_client.get(f"/api/articles/{aid}", headers=author_headers).json()["article"]
    assert current["status"] == "pending"

    # Reject with a reason; the author can edit again
    r = test_client.patch(
        f"/api/admin/articles/{aid}/status",
        json={"status": "rejected", "rejectionReason": "needs more detail"},
        headers=admin_headers,
    )
    assert r.json()["article"]["status"] == "rejected"
    assert r.json()["article"]["rejectionReason"] == "needs more detail"
    r = test_client.patch(f"/api/articles/{aid}", json={"content": "flag{detailed}"}, headers=author_headers)
    assert r.status_code == 200

    # Resubmit, approve, publish: now publicly readable
    test_client.patch(f"/api/articles/{aid}/submit", headers=author_headers)
    for status in ("approved", "published"):
        r = test_client.patch(
            f"/api/admin/articles/{aid}/status",
            json={"status": status},
            headers=admin_headers,
        )
        assert r.status_code == 200

    r = test_client.get(f"/api/topics/{topic['slug']}/articles/{article['slug']}")
    assert r.status_code == 200
    assert r.json()["article"]["content"] == "flag{detailed}"


def test_topic_delete_removes_published_articles(
    test_client, admin_headers, topic, create_topic, create_article, force_status
):
    other = create_topic("Crypto")
    ids = [create_article(f"Writeup {i}")["id"] for i in range(3)]
    for aid in ids:
        force_status(aid, S.PUBLISHED)
    untouched = create_article("Elsewhere", topic_id=other["id"])

    assert len(test_client.get(f"/api/topics/{topic['slug']}/articles").json()["articles"]) == 3

    r = test_client.delete(f"/api/admin/topics/{topic['id']}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["details"]["deletedArticles"] == 3

    r = test_client.get(f"/api/topics/{topic['slug']}/articles")
    assert r.status_code == 404
    assert r.json()["message"] == "Topic not found"

    for aid in ids:
        assert test_client.get(f"/api/articles/{aid}", headers=admin_headers).status_code == 404
    assert test_client.get(f"/api/articles/{untouched['id']}", headers=admin_headers).status_code == 200
