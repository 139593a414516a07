"""Status Bounty Bot package setup."""

from setuptools import setup, find_packages

setup(
    name="status-bounty-bot",
    version="0.1.0",
    package_dir={"": "backend"},
    packages=find_packages("backend", exclude=["tests", "tests.*"]),
    package_data={"bounty_bot": ["defaults/*.yml"]},
    install_requires=[
        "fastapi>=0.100",
        "uvicorn>=0.23",
        "httpx>=0.24",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "pyyaml>=6.0",
        "slack-sdk>=3.20",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
        ],
    },
    entry_points={
        "console_scripts": [
            "bounty-bot=bounty_bot.__main__:main",
        ],
    },
    python_requires=">=3.9",
)
