from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="clippycli",
    version="0.1.0",
    author="Your Name",
    author_email="your.email@example.com",
    description="Turn natural language into a single shell command using the Gemini API",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/yourusername/clippycli",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
        "Environment :: Console",
        "Topic :: Utilities",
    ],
    python_requires=">=3.8",
    install_requires=[
        "google-generativeai>=0.5.0",
        "rich>=12.0.0",
        "toml>=0.10.2",
        "python-dotenv>=1.0.0",
        "prompt_toolkit>=3.0.36",
        "pyperclip>=1.8.2",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "clippycli=clippycli.main:main",
        ],
    },
)
