from setuptools import setup, find_packages

setup(
    name="catalog-admin-api",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={"catalog_admin.db": ["seed/*.json"]},
    python_requires=">=3.10",
    install_requires=[
        "fastapi",
        "uvicorn",
        "sqlalchemy[asyncio]>=2.0",
        "asyncpg",
        "pydantic>=2",
        "pydantic-settings>=2.7",
        "python-dotenv",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio>=0.24",
            "httpx",
            "aiosqlite",
        ],
    },
)
