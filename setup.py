"""Setup file for the package."""

from setuptools import setup, find_packages

setup(
    name="ftse-scraper",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "playwright>=1.40.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-mock>=3.11.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'ftse-scraper=ftse_scraper.main:main',
        ],
    },
    description="Playwright scenarios that scrape the FTSE 100 constituents table",
    python_requires='>=3.8',
)
