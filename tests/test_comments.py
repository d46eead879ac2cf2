from fastapi import status


def test_get_post_comments(client, make_user, make_post, make_comment):
    user = make_user()
    post = make_post(user)
    for i in range(3):
        make_comment(post, user, body=f"comment {i}")

    response = client.get(f"/posts/{post.id}/comments")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    assert data["count"] == 3
    assert set(data["result"][0]) == {"id", "body", "post"}
    assert set(data["result"][0]["post"]) == {"id", "title", "body", "created_at"}


def test_get_post_comments_limit_is_capped(client, make_user, make_post, make_comment):
    user = make_user()
    post = make_post(user)
    for i in range(52):
        make_comment(post, user, body=f"comment {i}")

    response = client.get(f"/posts/{post.id}/comments", params={"limit": 500})

    assert response.status_code == status.HTTP_200_OK
    assert len(response.json()["data"]["result"]) == 50


def test_get_comments_of_missing_post(client):
    response = client.get("/posts/404/comments")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"status": 404, "data": {"message": "Post 404 could not be found"}}


def test_get_comment(client, make_user, make_post, make_comment):
    author = make_user("bob", first_name="Bob", last_name="Builder")
    comment = make_comment(make_post(author), author, body="Will there be food?")

    response = client.get(f"/comments/{comment.id}")

    assert response.status_code == status.HTTP_200_OK
    result = response.json()["data"]["result"]
    assert result["body"] == "Will there be food?"
    assert result["user"] == {"first_name": "Bob", "last_name": "Builder", "username": "bob"}


def test_get_comment_of_other_user(client, make_user, make_post, make_comment):
    author = make_user("bob")
    other = make_user("carol")
    comment = make_comment(make_post(author), author)

    response = client.get(f"/comments/{comment.id}", params={"user_id": other.id})

    assert response.status_code == status.HTTP_404_NOT_FOUND
