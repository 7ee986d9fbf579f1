"""
Bookshelf catalog: authors and the books they have written.
"""
