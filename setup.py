"""Setup configuration for a11ymetrics"""

from setuptools import setup, find_packages

setup(
    name="a11y-issue-metrics",
    version="0.1.0",
    description=(
        "CLI tool and relay service comparing accessibility-related GitHub issues "
        "with all recent issues: resolution rate, comments, time to close and to first comment."
    ),
    author="A11y Issue Metrics Contributors",
    author_email="",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "requests>=2.28.0",
        "fastapi>=0.100.0",
        "uvicorn>=0.23.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "httpx>=0.24.0",
            "black>=22.0",
            "flake8>=4.0",
            "mypy>=0.950",
        ],
    },
    entry_points={
        "console_scripts": [
            "a11y-issue-metrics=a11ymetrics.main:main",
            "a11y-issue-metrics-relay=a11ymetrics.relay:serve",
        ],
    },
)
