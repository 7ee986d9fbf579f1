"""
Tests for SqliteUnitOfWork.

Verifies the transaction boundary: work is visible only after commit,
anything else rolls back, and a mutating unit of work holds the write lock
for its whole duration.
"""
import pytest

from bookshelf.domain.entities import Author
from bookshelf.domain.value_objects import PageRequest
from bookshelf.infrastructure.db import SqliteDatabase, SqliteUnitOfWork


@pytest.fixture
def database(tmp_path):
    return SqliteDatabase(tmp_path / "test_catalog.db", timeout=0.2)


def count_authors(database):
    with SqliteUnitOfWork(database, read_only=True) as uow:
        return uow.authors.find_all_active(PageRequest()).total_elements


class TestCommitAndRollback:
    """Tests for transaction outcomes."""

    def test_commit_makes_work_visible(self, database):
        with SqliteUnitOfWork(database) as uow:
            uow.authors.save(Author.build(None, "Pushkin"))
            uow.commit()

        assert count_authors(database) == 1

    def test_leaving_without_commit_rolls_back(self, database):
        """Nothing is durable unless commit() was called."""
        with SqliteUnitOfWork(database) as uow:
            uow.authors.save(Author.build(None, "Pushkin"))

        assert count_authors(database) == 0

    def test_exception_rolls_back_and_propagates(self, database):
        """An error in the middle of the work discards all of it."""
        with pytest.raises(KeyError):
            with SqliteUnitOfWork(database) as uow:
                uow.authors.save(Author.build(None, "Pushkin"))
                uow.authors.save(Author.build(None, "Gogol"))
                raise KeyError("boom")

        assert count_authors(database) == 0

    def test_explicit_rollback(self, database):
        with SqliteUnitOfWork(database) as uow:
            uow.authors.save(Author.build(None, "Pushkin"))
            uow.rollback()

        assert count_authors(database) == 0


class TestLocking:
    """Tests for write serialization between units of work."""

    def test_second_writer_waits_for_first(self, database):
        """A mutating unit of work blocks other writers until it ends."""
        with SqliteUnitOfWork(database) as first:
            first.authors.save(Author.build(None, "Pushkin"))

            with pytest.raises(RuntimeError, match="Could not start transaction"):
                with SqliteUnitOfWork(database):
                    pass

            first.commit()

        # Lock released after the first unit of work ends
        with SqliteUnitOfWork(database) as second:
            second.authors.save(Author.build(None, "Gogol"))
            second.commit()

        assert count_authors(database) == 2

    def test_reader_does_not_see_uncommitted_work(self, database):
        with SqliteUnitOfWork(database) as writer:
            writer.authors.save(Author.build(None, "Pushkin"))

            assert count_authors(database) == 0

            writer.commit()

        assert count_authors(database) == 1
