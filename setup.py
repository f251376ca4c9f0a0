"""Setup script for InlineTrans."""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README
readme_path = Path(__file__).parent / "README.md"
readme = readme_path.read_text(encoding="utf-8") if readme_path.exists() else ""

setup(
    name="inlinetrans",
    version="1.0.0",
    description="Inline translation overlays for rendered HTML documents",
    long_description=readme,
    long_description_content_type="text/markdown",
    license="MIT",
    
    packages=find_packages(exclude=["tests*", "docs*", "examples*"]),
    
    python_requires=">=3.9",
    
    install_requires=[
        "beautifulsoup4>=4.12.0",
        "soupsieve>=2.5",
        "pyyaml>=6.0",
        "rich>=13.0.0",
        "python-dotenv>=1.0.0",
        "requests>=2.31.0",
        "typer>=0.9.0",
        "loguru>=0.7.0"
    ],
    
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "pytest-asyncio>=0.21.0",
            "black>=23.0.0",
            "flake8>=6.0.0",
            "mypy>=1.4.0",
            "isort>=5.12.0"
        ]
    },
    
    entry_points={
        "console_scripts": [
            "inlinetrans=cli.commands.main:cli",
        ],
    },
    
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Text Processing :: Linguistic",
        "Topic :: Text Processing :: Markup :: HTML",
    ],
    
    keywords="translation overlay html llm libretranslate openai",
)
