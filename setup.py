"""
Setup configuration for FIB Study.
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="fib-study",
    version="0.1.0",
    author="FIB Study Team",
    description="Fill-in-the-blank reading practice: CSV question import and cached word lookups",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["fib_study", "fib_study.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
    ],
    python_requires=">=3.8",
    install_requires=[
        "flask>=2.0.0",
        "flask-cors>=3.0.10",
        "werkzeug>=2.0.0",
        "requests>=2.25.0",
        "google-auth>=2.0.0",
        "google-api-core>=2.0.0",
        "google-cloud-translate>=3.0.0",
        "google-cloud-firestore>=2.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "hypothesis>=6.0.0",
            "black>=22.0.0",
            "flake8>=4.0.0",
            "mypy>=0.950",
        ],
    },
    entry_points={
        "console_scripts": [
            "fib-study=fib_study.main:main",
        ],
    },
)
