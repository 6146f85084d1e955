"""Author workspace: drafts, ownership, edit/delete guards, submission."""

from app.utils.enums import ArticleStatus as S
from app.utils.enums import UserRole


class TestCreateArticle:
    def test_create_is_always_draft(self, test_client, author_headers, topic):
        r = test_client.post(
            "/api/articles",
            json={
                "title": "XSS in the Wild",
                "topicId": topic["id"],
                "content": "<script>alert(1)</script>",
                "tags": ["xss", "web"],
                "coverImage": "http://localhost:8000/uploads/ctf-images/x.png",
                "status": "published",
            },
            headers=author_headers,
        )
        assert r.status_code == 201
        article = r.json()["article"]
        assert article["status"] == "draft"
        assert article["authorUid"] == "author-1"
        assert article["authorName"] == "Alice Author"
        assert article["tags"] == ["xss", "web"]
        assert article["slug"].startswith("xss-in-the-wild-")
        assert article["publishedAt"] is None

    def test_author_name_falls_back_to_email(self, test_client, make_user, topic):
        headers = make_user("nameless", UserRole.AUTHOR, email="nameless@cys-test.local")
        r = test_client.post(
            "/api/articles",
            json={"title": "T", "topicId": topic["id"], "content": "C"},
            headers=headers,
        )
        assert r.json()["article"]["authorName"] == "nameless@cys-test.local"

    def test_missing_fields(self, test_client, author_headers, topic):
        r = test_client.post(
            "/api/articles",
            json={"title": "Only a title"},
            headers=author_headers,
        )
        assert r.status_code == 400
        assert r.json()["message"] == "title, topicId, and content are required"

    def test_unknown_topic(self, test_client, author_headers, topic):
        r = test_client.post(
            "/api/articles",
            json={"title": "T", "topicId": 999, "content": "C"},
            headers=author_headers,
        )
        assert r.status_code == 404
        assert r.json()["message"] == "Topic not found"

    def test_identical_titles_get_distinct_slugs(self, create_article):
        slugs = {create_article("Same Title")["slug"] for _ in range(3)}
        assert len(slugs) == 3

    def test_student_cannot_create(self, test_client, student_headers, topic):
        r = test_client.post(
            "/api/articles",
            json={"title": "T", "topicId": topic["id"], "content": "C"},
            headers=student_headers,
        )
        assert r.status_code == 403


class TestMyArticles:
    def test_only_own_articles_newest_first(
        self, test_client, author_headers, other_author_headers, create_article
    ):
        first = create_article("First")
        second = create_article("Second")
        create_article("Not mine", headers=other_author_headers)

        r = test_client.get("/api/articles/my", headers=author_headers)
        assert r.status_code == 200
        articles = r.json()["articles"]
        assert [a["id"] for a in articles] == [second["id"], first["id"]]
        assert articles[0]["topic"]["slug"] == "web-exploitation"


class TestViewArticle:
    def test_owner_views_with_topic(self, test_client, author_headers, create_article):
        article = create_article()
        r = test_client.get(f"/api/articles/{article['id']}", headers=author_headers)
        assert r.status_code == 200
        assert r.json()["article"]["topic"]["title"] == "Web Exploitation"

    def test_other_author_forbidden(self, test_client, other_author_headers, create_article):
        article = create_article()
        r = test_client.get(f"/api/articles/{article['id']}", headers=other_author_headers)
        assert r.status_code == 403
        assert r.json()["message"] == "Not your article"

    def test_admin_views_any(self, test_client, admin_headers, create_article):
        article = create_article()
        r = test_client.get(f"/api/articles/{article['id']}", headers=admin_headers)
        assert r.status_code == 200

    def test_missing(self, test_client, author_headers):
        r = test_client.get("/api/articles/999", headers=author_headers)
        assert r.status_code == 404


class TestEditArticle:
    def test_owner_edits_draft(self, test_client, author_headers, create_article):
        article = create_article()
        r = test_client.patch(
            f"/api/articles/{article['id']}",
            json={"title": "Renamed", "tags": ["sqli"]},
            headers=author_headers,
        )
        assert r.status_code == 200
        updated = r.json()["article"]
        assert updated["title"] == "Renamed"
        assert updated["tags"] == ["sqli"]
        assert updated["slug"] == article["slug"]
        assert updated["status"] == "draft"

    def test_status_not_editable_through_patch(self, test_client, author_headers, create_article):
        article = create_article()
        r = test_client.patch(
            f"/api/articles/{article['id']}",
            json={"content": "new", "status": "published"},
            headers=author_headers,
        )
        assert r.status_code == 200
        assert r.json()["article"]["status"] == "draft"

    def test_approved_is_locked_for_owner(self, test_client, author_headers, create_article, force_status):
        article = create_article()
        force_status(article["id"], S.APPROVED)
        r = test_client.patch(
            f"/api/articles/{article['id']}",
            json={"title": "Sneaky"},
            headers=author_headers,
        )
        assert r.status_code == 400
        assert r.json()["message"] == 'Cannot edit an article in "approved" state'

    def test_published_is_locked_for_owner(self, test_client, author_headers, create_article, force_status):
        article = create_article()
        force_status(article["id"], S.PUBLISHED)
        r = test_client.patch(
            f"/api/articles/{article['id']}",
            json={"content": "rewrite"},
            headers=author_headers,
        )
        assert r.status_code == 400

    def test_admin_edits_published(self, test_client, admin_headers, create_article, force_status):
        article = create_article()
        force_status(article["id"], S.PUBLISHED)
        r = test_client.patch(
            f"/api/articles/{article['id']}",
            json={"content": "typo fix"},
            headers=admin_headers,
        )
        assert r.status_code == 200
        assert r.json()["article"]["content"] == "typo fix"
        assert r.json()["article"]["status"] == "published"

    def test_other_author_cannot_edit(self, test_client, other_author_headers, create_article):
        article = create_article()
        r = test_client.patch(
            f"/api/articles/{article['id']}",
            json={"title": "Mine now"},
            headers=other_author_headers,
        )
        assert r.status_code == 403


class TestDeleteArticle:
    def test_owner_deletes_draft(self, test_client, author_headers, create_article):
        article = create_article()
        r = test_client.delete(f"/api/articles/{article['id']}", headers=author_headers)
        assert r.status_code == 200
        assert r.json()["message"] == "Article deleted"
        assert test_client.get(f"/api/articles/{article['id']}", headers=author_headers).status_code == 404

    def test_owner_deletes_rejected(self, test_client, author_headers, create_article, force_status):
        article = create_article()
        force_status(article["id"], S.REJECTED)
        r = test_client.delete(f"/api/articles/{article['id']}", headers=author_headers)
        assert r.status_code == 200

    def test_pending_cannot_be_deleted_even_by_admin(
        self, test_client, admin_headers, create_article, force_status
    ):
        article = create_article()
        force_status(article["id"], S.PENDING)
        r = test_client.delete(f"/api/articles/{article['id']}", headers=admin_headers)
        assert r.status_code == 400
        assert r.json()["message"] == "Can only delete draft or rejected articles"

    def test_other_author_cannot_delete(self, test_client, other_author_headers, create_article):
        article = create_article()
        r = test_client.delete(f"/api/articles/{article['id']}", headers=other_author_headers)
        assert r.status_code == 403


class TestSubmitArticle:
    def test_submit_draft(self, test_client, author_headers, create_article):
        article = create_article()
        r = test_client.patch(f"/api/articles/{article['id']}/submit", headers=author_headers)
        assert r.status_code == 200
        assert r.json()["article"]["status"] == "pending"

    def test_resubmit_rejected_clears_reason(self, test_client, author_headers, create_article, force_status):
        article = create_article()
        force_status(article["id"], S.REJECTED, rejection_reason="Add screenshots")
        r = test_client.patch(f"/api/articles/{article['id']}/submit", headers=author_headers)
        assert r.status_code == 200
        assert r.json()["article"]["status"] == "pending"
        assert r.json()["article"]["rejectionReason"] is None

    def test_submit_pending_again(self, test_client, author_headers, create_article, force_status):
        article = create_article()
        force_status(article["id"], S.PENDING)
        r = test_client.patch(f"/api/articles/{article['id']}/submit", headers=author_headers)
        assert r.status_code == 400
        assert r.json()["message"] == 'Cannot submit an article in "pending" state'

    def test_only_owner_submits(self, test_client, other_author_headers, create_article):
        article = create_article()
        r = test_client.patch(f"/api/articles/{article['id']}/submit", headers=other_author_headers)
        assert r.status_code == 403
