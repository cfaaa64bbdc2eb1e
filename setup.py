"""Setup script for Student Dashboard."""
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="student-dashboard",
    version="1.0.0",
    description="Job application tracker with a REST backend and a terminal kanban board",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["student_dashboard", "student_dashboard.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "Topic :: Office/Business",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.4", "pytest-asyncio>=0.23"],
    },
    entry_points={
        "console_scripts": [
            "student-dashboard=student_dashboard.cli:main",
            "student-dashboard-api=student_dashboard.cli:api",
        ],
    },
)
