"""
location: setup.py


"""
from setuptools import setup, find_packages

setup(
    name="sports-mcp",
    version="0.1.0",
    packages=find_packages(include=["sports_mcp", "sports_mcp.*"]),
    python_requires=">=3.10",
    install_requires=[
        "mcp>=1.6.0,<2",
        "httpx>=0.28.1",
        "nba_api>=1.9.0",
        "pandas>=2.2.3",
        "pydantic>=2.11.3",
        "python-dotenv>=1.1.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "mypy>=1.0.0",
            "black>=23.0.0",
            "isort>=5.0.0",
            "invoke>=2.2.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "sports-mcp = sports_mcp.sports_server:main",
            "sports-compare = sports_mcp.cli:main",
        ],
    },
)
