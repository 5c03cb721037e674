"""Query resolvers — lists, lookups, filters, sorting and computed fields."""


async def test_books_lists_seeded_catalogue_with_authors(graphql):
    body = await graphql("{ books { id title author { name } } }")
    books = {b["id"]: b for b in body["data"]["books"]}
    assert set(books) == {"book-1", "book-2", "book-3", "book-4"}
    assert books["book-3"]["author"]["name"] == "Jane Austen"


async def test_books_filter_by_title_contains(graphql):
    body = await graphql('{ books(where: { title: { contains: "Farm" } }) { title } }')
    assert body["data"]["books"] == [{"title": "Animal Farm"}]


async def test_books_filter_by_status(graphql):
    published = await graphql("{ books(where: { status: { eq: PUBLISHED } }) { id } }")
    drafts = await graphql("{ books(where: { status: { eq: DRAFT } }) { id } }")
    assert len(published["data"]["books"]) == 4
    assert drafts["data"]["books"] == []


async def test_books_filter_by_year_range(graphql):
    body = await graphql(
        "{ books(where: { publishedYear: { gte: 1949 } }, order: [{ publishedYear: ASC }]) { title } }",
    )
    assert [b["title"] for b in body["data"]["books"]] == ["1984", "Foundation"]


async def test_books_sorted_by_year(graphql):
    body = await graphql("{ books(order: [{ publishedYear: ASC }]) { title publishedYear } }")
    years = [b["publishedYear"] for b in body["data"]["books"]]
    assert years == sorted(years)
    assert body["data"]["books"][0]["title"] == "Pride and Prejudice"


async def test_book_by_id_with_review_aggregates(graphql):
    body = await graphql(
        '{ bookById(id: "book-1") { title averageRating reviewCount reviews { rating } } }',
    )
    book = body["data"]["bookById"]
    assert book["title"] == "1984"
    assert book["reviewCount"] == 2
    assert book["averageRating"] == 4.5


async def test_book_by_id_unknown_is_null(graphql):
    body = await graphql('{ bookById(id: "nope") { id } }')
    assert body["data"]["bookById"] is None


async def test_author_by_id_counts_books(graphql):
    body = await graphql('{ authorById(id: "author-1") { name bookCount books { title } } }')
    author = body["data"]["authorById"]
    assert author["name"] == "George Orwell"
    assert author["bookCount"] == 2
    assert {b["title"] for b in author["books"]} == {"1984", "Animal Farm"}


async def test_authors_filter_by_name_starts_with(graphql):
    body = await graphql('{ authors(where: { name: { startsWith: "Isaac" } }) { id } }')
    assert body["data"]["authors"] == [{"id": "author-3"}]


async def test_reviews_filter_and_back_reference(graphql):
    body = await graphql("{ reviews(where: { rating: { lt: 5 } }) { id reviewerName book { title } } }")
    assert body["data"]["reviews"] == [
        {"id": "review-2", "reviewerName": "CriticalReader", "book": {"title": "1984"}},
    ]


async def test_reviews_filter_by_book_id_in(graphql):
    body = await graphql('{ reviews(where: { bookId: { in: ["book-2", "book-3"] } }) { id } }')
    assert {r["id"] for r in body["data"]["reviews"]} == {"review-3", "review-4"}


async def test_concurrent_data_returns_all_collections(graphql):
    body = await graphql("{ concurrentData { books { id } authors { id } reviews { id } } }")
    data = body["data"]["concurrentData"]
    assert len(data["books"]) == 4
    assert len(data["authors"]) == 3
    assert len(data["reviews"]) == 5


async def test_book_with_error_raises_coded_error(graphql):
    body = await graphql("{ bookWithError(simulateError: true) { id } }")
    assert body["data"]["bookWithError"] is None
    error = body["errors"][0]
    assert error["message"] == "Simulated error for testing purposes"
    assert error["extensions"]["code"] == "SIMULATED_ERROR"


async def test_book_with_error_returns_mock_book(graphql):
    body = await graphql(
        "{ bookWithError(simulateError: false) { id title description status averageRating } }",
    )
    assert body["data"]["bookWithError"] == {
        "id": "mock-book",
        "title": "Mock Book",
        "description": "This is a mock book for testing",
        "status": "DRAFT",
        "averageRating": None,
    }
