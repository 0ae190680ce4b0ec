from setuptools import setup, find_packages

setup(
    name="writenow",
    version="0.1.0",
    description="Write now, edit later: a line-at-a-time terminal scratchpad",
    packages=find_packages(include=["writenow", "writenow.*"]),
    install_requires=[
        "rich",
        "prompt-toolkit>=3.0.29",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "writenow=writenow.cli:run",
        ],
    },
    python_requires=">=3.11",
)
