from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

LOGIN_PAGE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <title>Test Page</title>
    <meta name="description" content="Login fixture">
</head>
<body>
    <div class="container">
        <h1 id="main-title">Welcome to Test Page</h1>

        <form id="login-form" action="/login" method="post">
            <div class="form-group">
                <label for="username">Username:</label>
                <input type="text" id="username" name="username" placeholder="Enter username" required>
            </div>

            <div class="form-group">
                <label for="password">Password:</label>
                <input type="password" id="password" name="password" placeholder="Enter password" required>
            </div>

            <div class="form-group">
                <button type="submit" id="submit-btn" class="btn btn-primary" data-testid="login-submit">
                    Login
                </button>
            </div>
        </form>

        <nav role="navigation">
            <ul>
                <li><a href="/home" role="link">Home</a></li>
                <li><a href="/about" role="link">About</a></li>
                <li><a href="/contact" role="link">Contact</a></li>
            </ul>
        </nav>

        <section class="content">
            <article>
                <h2>Article Title</h2>
                <p>This is some content.</p>
                <button class="btn-secondary" onclick="showMore()">Show More</button>
            </article>
        </section>
    </div>
</body>
</html>
"""


def soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


@pytest.fixture
def login_html() -> str:
    return LOGIN_PAGE


@pytest.fixture
def login_tree() -> BeautifulSoup:
    return soup(LOGIN_PAGE)
