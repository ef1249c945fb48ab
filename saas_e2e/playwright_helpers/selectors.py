"""Login page selectors and in-page storage scripts.

The admin front end ships in Traditional Chinese and English, so text and
placeholder matches cover both.
"""

LOGIN_PATH = "/login"
ROOT_PATH = "/"

USERNAME_INPUT = ", ".join(
    [
        'input[type="email"]',
        'input[name="username"]',
        'input[placeholder*="郵箱"]',
        'input[placeholder*="email"]',
    ]
)

PASSWORD_INPUT = 'input[type="password"], input[name="password"]'

SUBMIT_BUTTON = ", ".join(
    [
        'button[type="submit"]',
        'button:has-text("登錄")',
        'button:has-text("登入")',
        'button:has-text("Login")',
    ]
)

# Front-end code reads the token from either key depending on the page.
TOKEN_STORAGE_KEYS = ("auth_token", "token")

SEED_TOKEN_SCRIPT = """(token) => {
    localStorage.setItem('auth_token', token);
    localStorage.setItem('token', token);
}"""

HAS_TOKEN_SCRIPT = """() => {
    return !!(localStorage.getItem('auth_token') || localStorage.getItem('token'));
}"""

__all__ = [
    "HAS_TOKEN_SCRIPT",
    "LOGIN_PATH",
    "PASSWORD_INPUT",
    "ROOT_PATH",
    "SEED_TOKEN_SCRIPT",
    "SUBMIT_BUTTON",
    "TOKEN_STORAGE_KEYS",
    "USERNAME_INPUT",
]
