"""Setup script for check-ai."""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

with open("requirements.txt", "r", encoding="utf-8") as f:
    requirements = [line.strip() for line in f if line.strip() and not line.startswith("#")]

setup(
    name="check-ai",
    version="1.0.0",
    author="check-ai contributors",
    description="Audit any repository for AI-readiness",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/f/check-ai",
    packages=find_packages(include=["check_ai", "check_ai.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Quality Assurance",
    ],
    python_requires=">=3.10",
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "check-ai=check_ai.cli.main:main",
        ],
    },
    include_package_data=True,
    package_data={
        "check_ai": ["configs/*"],
    },
)
