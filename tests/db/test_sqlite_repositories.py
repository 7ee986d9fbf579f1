"""
Tests for the SQLite author and book repositories.

Validates the visibility filter on every read path, the save cascade from
an author to its books, and offset pagination over active rows.

Test Pattern: AAA (Arrange-Act-Assert)
- Arrange: Set up test data and preconditions
- Act: Execute the operation being tested
- Assert: Verify the expected outcomes
"""
import pytest

from bookshelf.domain.entities import Author, Book
from bookshelf.domain.value_objects import PageRequest
from bookshelf.infrastructure.db import SqliteDatabase, SqliteUnitOfWork


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def database(tmp_path):
    """
    Create a database in a temporary file for each test.

    Uses pytest's tmp_path fixture to ensure isolation between tests.
    """
    return SqliteDatabase(tmp_path / "test_catalog.db")


def save_author(database, name, titles=()):
    """Persist an author with one book per title and return it."""
    with SqliteUnitOfWork(database) as uow:
        author = Author.build(None, name)
        for i, title in enumerate(titles, start=1):
            author.add_book(Book.build(None, title, 100 + i, author))
        saved = uow.authors.save(author)
        uow.commit()
    return saved


def direct_book_row(database, book_id):
    """Read a book row bypassing the repositories."""
    conn = database.connect()
    try:
        return conn.execute("SELECT * FROM books WHERE id = ?", (book_id,)).fetchone()
    finally:
        conn.close()


# ============================================================================
# SCHEMA TESTS
# ============================================================================

class TestDatabaseInitialization:
    """Tests for schema creation."""

    def test_creates_tables_on_init(self, database):
        """A fresh database should be empty but queryable."""
        with SqliteUnitOfWork(database, read_only=True) as uow:
            page = uow.authors.find_all_active(PageRequest())

        assert page.total_elements == 0
        assert page.content == []

    def test_init_is_idempotent(self, tmp_path):
        """Opening the same file twice must keep existing rows."""
        path = tmp_path / "catalog.db"
        save_author(SqliteDatabase(path), "Pushkin")

        reopened = SqliteDatabase(path)

        with SqliteUnitOfWork(reopened, read_only=True) as uow:
            assert uow.authors.find_all_active(PageRequest()).total_elements == 1

    def test_ping(self, database):
        assert database.ping() is True


# ============================================================================
# SAVE OPERATION TESTS
# ============================================================================

class TestAuthorSave:
    """Tests for SqliteAuthorRepository.save()."""

    def test_insert_assigns_id_and_timestamp(self, database):
        """Saving an unsaved author populates id and created_at."""
        # Act
        saved = save_author(database, "Pushkin")

        # Assert
        assert saved.id == 1
        assert saved.created_at is not None
        assert saved.get_books() == ()

    def test_save_cascades_to_new_books(self, database):
        """Books attached in memory are inserted with the author."""
        # Act
        saved = save_author(database, "Pushkin", ["Onegin", "Boris Godunov"])

        # Assert
        titles = [book.title for book in saved.get_books()]
        assert titles == ["Onegin", "Boris Godunov"]
        assert all(book.id is not None for book in saved.get_books())
        assert all(book.author_id == saved.id for book in saved.get_books())

    def test_update_keeps_created_at(self, database):
        """created_at is written once and never updated."""
        # Arrange
        saved = save_author(database, "Pushkin")
        original_created_at = saved.created_at

        # Act
        with SqliteUnitOfWork(database) as uow:
            author = uow.authors.find_active_by_id(saved.id)
            author.name = "Alexander Pushkin"
            author.created_at = None
            updated = uow.authors.save(author)
            uow.commit()

        # Assert
        assert updated.name == "Alexander Pushkin"
        assert updated.created_at == original_created_at

    def test_save_deleted_author_is_not_filtered(self, database):
        """Writes may flip the deleted flag; the returned state shows it."""
        # Arrange
        saved = save_author(database, "Pushkin")

        # Act
        with SqliteUnitOfWork(database) as uow:
            author = uow.authors.find_active_by_id(saved.id)
            author.deleted = True
            result = uow.authors.save(author)
            uow.commit()

        # Assert
        assert result.deleted is True

    def test_cascade_writes_soft_deleted_books(self, database):
        """soft_delete_all_books followed by save flags every book row."""
        # Arrange
        saved = save_author(database, "Pushkin", ["Onegin", "Boris Godunov"])
        book_ids = [book.id for book in saved.get_books()]

        # Act
        with SqliteUnitOfWork(database) as uow:
            author = uow.authors.find_active_by_id(saved.id)
            author.soft_delete_all_books()
            result = uow.authors.save(author)
            uow.commit()

        # Assert
        assert result.get_books() == ()
        for book_id in book_ids:
            assert direct_book_row(database, book_id)["deleted"] == 1

    def test_non_positive_pages_violate_constraint(self, database):
        """The schema rejects page counts that slipped past validation."""
        with SqliteUnitOfWork(database) as uow:
            author = Author.build(None, "Pushkin")
            author.add_book(Book.build(None, "Broken", 0, author))

            with pytest.raises(ValueError, match="violates catalog constraints"):
                uow.authors.save(author)


class TestBookSave:
    """Tests for SqliteBookRepository.save()."""

    def test_book_for_missing_author_violates_foreign_key(self, database):
        with SqliteUnitOfWork(database) as uow:
            with pytest.raises(ValueError, match="violates catalog constraints"):
                uow.books.save(Book(id=None, title="Orphan", pages_number=10, author_id=999))

    def test_update_never_changes_owner(self, database):
        """author_id is fixed once the book exists."""
        # Arrange
        first = save_author(database, "Pushkin", ["Onegin"])
        second = save_author(database, "Gogol")
        book_id = first.get_books()[0].id

        # Act
        with SqliteUnitOfWork(database) as uow:
            book = uow.books.find_active_by_id(book_id)
            book.author_id = second.id
            book.title = "Eugene Onegin"
            result = uow.books.save(book)
            uow.commit()

        # Assert
        assert result.title == "Eugene Onegin"
        assert result.author_id == first.id


# ============================================================================
# VISIBILITY FILTER TESTS
# ============================================================================

class TestFindActiveById:
    """Tests for find_active_by_id() on both repositories."""

    def test_returns_active_author_with_active_books_only(self, database):
        # Arrange
        saved = save_author(database, "Pushkin", ["Onegin", "Boris Godunov"])
        deleted_book_id = saved.get_books()[0].id
        with SqliteUnitOfWork(database) as uow:
            book = uow.books.find_active_by_id(deleted_book_id)
            book.deleted = True
            uow.books.save(book)
            uow.commit()

        # Act
        with SqliteUnitOfWork(database, read_only=True) as uow:
            author = uow.authors.find_active_by_id(saved.id)

        # Assert
        assert [book.title for book in author.get_books()] == ["Boris Godunov"]

    def test_missing_author_returns_none(self, database):
        with SqliteUnitOfWork(database, read_only=True) as uow:
            assert uow.authors.find_active_by_id(42) is None

    def test_deleted_author_returns_none(self, database):
        """A deleted row is reported exactly like a missing one."""
        # Arrange
        saved = save_author(database, "Pushkin")
        with SqliteUnitOfWork(database) as uow:
            author = uow.authors.find_active_by_id(saved.id)
            author.deleted = True
            uow.authors.save(author)
            uow.commit()

        # Act & Assert
        with SqliteUnitOfWork(database, read_only=True) as uow:
            assert uow.authors.find_active_by_id(saved.id) is None

    def test_deleted_book_returns_none(self, database):
        saved = save_author(database, "Pushkin", ["Onegin"])
        book_id = saved.get_books()[0].id
        with SqliteUnitOfWork(database) as uow:
            book = uow.books.find_active_by_id(book_id)
            book.deleted = True
            uow.books.save(book)
            uow.commit()

        with SqliteUnitOfWork(database, read_only=True) as uow:
            assert uow.books.find_active_by_id(book_id) is None


# ============================================================================
# PAGINATION TESTS
# ============================================================================

class TestFindAllActive:
    """Tests for find_all_active() pagination."""

    @pytest.fixture
    def seeded(self, database):
        """Seven active books and three deleted ones across two authors."""
        save_author(database, "Pushkin", [f"P{i}" for i in range(5)])
        save_author(database, "Gogol", [f"G{i}" for i in range(5)])

        with SqliteUnitOfWork(database) as uow:
            for book_id in (2, 5, 9):
                book = uow.books.find_active_by_id(book_id)
                book.deleted = True
                uow.books.save(book)
            uow.commit()
        return database

    def test_pages_cover_active_books_exactly_once(self, seeded):
        """ceil(N/S) pages whose ordered union is every active book."""
        # Arrange
        size = 3
        collected = []

        # Act
        with SqliteUnitOfWork(seeded, read_only=True) as uow:
            first = uow.books.find_all_active(PageRequest(page=0, size=size))
            for number in range(first.total_pages):
                page = uow.books.find_all_active(PageRequest(page=number, size=size))
                assert page.number_of_elements <= size
                collected.extend(book.id for book in page.content)

        # Assert
        assert first.total_elements == 7
        assert first.total_pages == 3
        assert collected == [1, 3, 4, 6, 7, 8, 10]

    def test_page_past_the_end_is_empty(self, seeded):
        with SqliteUnitOfWork(seeded, read_only=True) as uow:
            page = uow.books.find_all_active(PageRequest(page=5, size=3))

        assert page.content == []
        assert page.total_elements == 7

    def test_sort_by_title_descending(self, seeded):
        with SqliteUnitOfWork(seeded, read_only=True) as uow:
            page = uow.books.find_all_active(
                PageRequest(page=0, size=10, sort="title", direction="desc")
            )

        titles = [book.title for book in page.content]
        assert titles == sorted(titles, reverse=True)
        assert len(titles) == 7

    def test_unknown_sort_key_raises(self, seeded):
        with SqliteUnitOfWork(seeded, read_only=True) as uow:
            with pytest.raises(ValueError, match="Cannot sort by 'deleted'"):
                uow.books.find_all_active(PageRequest(sort="deleted"))

    def test_authors_page_skips_deleted_authors(self, seeded):
        # Arrange
        with SqliteUnitOfWork(seeded) as uow:
            author = uow.authors.find_active_by_id(1)
            author.deleted = True
            uow.authors.save(author)
            uow.commit()

        # Act
        with SqliteUnitOfWork(seeded, read_only=True) as uow:
            page = uow.authors.find_all_active(PageRequest(sort="name"))

        # Assert
        assert [author.name for author in page.content] == ["Gogol"]
        assert page.total_elements == 1
        assert len(page.content[0].get_books()) == 4
