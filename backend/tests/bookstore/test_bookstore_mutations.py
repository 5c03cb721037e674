"""Mutation resolvers — authentication guard, payload errors and persisted changes."""

CREATE_BOOK = """
mutation($input: CreateBookInput!) {
  createBook(input: $input) {
    book { id title status author { name bookCount } reviewCount }
    errors { message code }
  }
}
"""

UPDATE_BOOK = """
mutation($input: UpdateBookInput!) {
  updateBook(input: $input) {
    book { id title description publishedYear status author { id } }
    errors { message code }
  }
}
"""

DELETE_BOOK = """
mutation($id: ID!) { deleteBook(id: $id) { success errors { message code } } }
"""

CREATE_REVIEW = """
mutation($input: CreateReviewInput!) {
  createReview(input: $input) {
    review { id rating book { id averageRating reviewCount } }
    errors { message code }
  }
}
"""


def _new_book(**overrides) -> dict:
    book = {"title": "Homage to Catalonia", "authorId": "author-1", "publishedYear": 1938}
    book.update(overrides)
    return {"input": book}


async def test_mutation_without_token_is_rejected(graphql):
    body = await graphql(CREATE_BOOK, _new_book())
    error = body["errors"][0]
    assert error["message"] == "The current user is not authorized to access this resource."
    assert error["extensions"]["code"] == "AUTH_NOT_AUTHENTICATED"


async def test_mutation_with_invalid_token_is_rejected(graphql):
    body = await graphql(CREATE_BOOK, _new_book(), headers={"Authorization": "Bearer bogus"})
    assert body["errors"][0]["extensions"]["code"] == "AUTH_NOT_AUTHENTICATED"


async def test_create_book_defaults_to_draft(graphql, auth_headers):
    body = await graphql(CREATE_BOOK, _new_book(), headers=auth_headers)
    payload = body["data"]["createBook"]
    assert payload["errors"] == []
    assert payload["book"]["status"] == "DRAFT"
    assert payload["book"]["author"] == {"name": "George Orwell", "bookCount": 3}
    assert payload["book"]["reviewCount"] == 0

    listed = await graphql("{ books { id } }")
    assert len(listed["data"]["books"]) == 5


async def test_create_book_accepts_issued_jwt(client, graphql):
    token = (await client.post(
        "/api/token", json={"userId": "user-1", "userName": "Test User"},
    )).json()["token"]
    body = await graphql(
        CREATE_BOOK, _new_book(status="PUBLISHED"), headers={"Authorization": f"Bearer {token}"},
    )
    assert body["data"]["createBook"]["book"]["status"] == "PUBLISHED"


async def test_create_book_unknown_author(graphql, auth_headers):
    body = await graphql(CREATE_BOOK, _new_book(authorId="author-404"), headers=auth_headers)
    payload = body["data"]["createBook"]
    assert payload["book"] is None
    assert payload["errors"] == [{"message": "Author not found", "code": "AUTHOR_NOT_FOUND"}]


async def test_update_book_changes_only_given_fields(graphql, auth_headers):
    body = await graphql(
        UPDATE_BOOK, {"input": {"id": "book-1", "title": "Nineteen Eighty-Four"}}, headers=auth_headers,
    )
    book = body["data"]["updateBook"]["book"]
    assert book["title"] == "Nineteen Eighty-Four"
    assert book["publishedYear"] == 1949
    assert book["status"] == "PUBLISHED"
    assert book["description"].startswith("A dystopian novel")


async def test_update_book_moves_to_other_author(graphql, auth_headers):
    body = await graphql(
        UPDATE_BOOK, {"input": {"id": "book-2", "authorId": "author-3"}}, headers=auth_headers,
    )
    assert body["data"]["updateBook"]["book"]["author"] == {"id": "author-3"}

    author = await graphql('{ authorById(id: "author-3") { bookCount } }')
    assert author["data"]["authorById"]["bookCount"] == 2


async def test_update_book_not_found(graphql, auth_headers):
    body = await graphql(UPDATE_BOOK, {"input": {"id": "book-404", "title": "x"}}, headers=auth_headers)
    assert body["data"]["updateBook"]["errors"][0]["code"] == "BOOK_NOT_FOUND"


async def test_update_book_unknown_author(graphql, auth_headers):
    body = await graphql(
        UPDATE_BOOK, {"input": {"id": "book-1", "authorId": "author-404"}}, headers=auth_headers,
    )
    assert body["data"]["updateBook"]["errors"][0]["code"] == "AUTHOR_NOT_FOUND"


async def test_delete_book_removes_its_reviews(graphql, auth_headers):
    body = await graphql(DELETE_BOOK, {"id": "book-1"}, headers=auth_headers)
    assert body["data"]["deleteBook"] == {"success": True, "errors": []}

    assert (await graphql('{ bookById(id: "book-1") { id } }'))["data"]["bookById"] is None
    reviews = await graphql('{ reviews(where: { bookId: { eq: "book-1" } }) { id } }')
    assert reviews["data"]["reviews"] == []


async def test_delete_book_not_found(graphql, auth_headers):
    body = await graphql(DELETE_BOOK, {"id": "book-404"}, headers=auth_headers)
    payload = body["data"]["deleteBook"]
    assert payload["success"] is False
    assert payload["errors"] == [{"message": "Book not found", "code": "BOOK_NOT_FOUND"}]


async def test_create_author(graphql, auth_headers):
    body = await graphql(
        'mutation { createAuthor(input: { name: "Ursula K. Le Guin" }) { author { id name bookCount } errors { code } } }',
        headers=auth_headers,
    )
    payload = body["data"]["createAuthor"]
    assert payload["errors"] == []
    assert payload["author"]["name"] == "Ursula K. Le Guin"
    assert payload["author"]["bookCount"] == 0


async def test_create_review_updates_aggregates(graphql, auth_headers):
    body = await graphql(CREATE_REVIEW, {"input": {
        "bookId": "book-1", "title": "Bleak", "rating": 3, "reviewerName": "Skeptic",
    }}, headers=auth_headers)
    review = body["data"]["createReview"]["review"]
    assert review["rating"] == 3
    assert review["book"]["reviewCount"] == 3
    assert review["book"]["averageRating"] == 4.0


async def test_create_review_rejects_out_of_range_rating(graphql, auth_headers):
    body = await graphql(CREATE_REVIEW, {"input": {
        "bookId": "book-1", "title": "Too good", "rating": 6, "reviewerName": "Fan",
    }}, headers=auth_headers)
    payload = body["data"]["createReview"]
    assert payload["review"] is None
    assert payload["errors"] == [
        {"message": "Rating must be between 1 and 5", "code": "INVALID_RATING"},
    ]


async def test_create_review_checks_book_before_rating(graphql, auth_headers):
    body = await graphql(CREATE_REVIEW, {"input": {
        "bookId": "book-404", "title": "?", "rating": 0, "reviewerName": "Fan",
    }}, headers=auth_headers)
    assert body["data"]["createReview"]["errors"][0]["code"] == "BOOK_NOT_FOUND"
