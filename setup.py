# setup.py
from setuptools import setup, find_packages

setup(
    name="webmail_harvester",
    version="0.1.0",
    description="Асинхронный сборщик email-адресов с сайтов Webmail Harvester",
    packages=find_packages(exclude=["tests", "tests.*"]),  # автоматически найдёт папку webmail_harvester
    package_data={"webmail_harvester": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "Jinja2>=3.1",
        "openai>=1.0",
        "openpyxl>=3.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "webmail-harvester=webmail_harvester.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
