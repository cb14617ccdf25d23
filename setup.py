from setuptools import setup, find_packages

setup(
    name="messenger",
    version="0.1.0",
    description="Console messenger on top of a relational database",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "sqlalchemy[asyncio]>=2.0.42",
        "asyncpg>=0.29",
        "aiosqlite>=0.21.0",
        "environs>=14.2.0",
        "pydantic>=2.11.7",
        "dishka>=1.6",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.24",
        ],
    },
    python_requires=">=3.10",
    entry_points={
        "console_scripts": [
            "messenger=messenger.__main__:run"
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
