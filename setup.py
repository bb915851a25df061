# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="auxdeps",
    version="0.1.0",
    description="Static dependency analysis for bot formulas",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["auxdeps", "auxdeps.*"]),
    python_requires=">=3.9",
    install_requires=[
        "tree-sitter>=0.22",
        "tree-sitter-javascript>=0.23",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'auxdeps=auxdeps.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
