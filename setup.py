from setuptools import setup, find_packages

setup(
    name="expense_qa",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={"expense_qa": ["static/*.j2"]},
    install_requires=[
        "playwright",
        "pydantic",
        "python-dotenv",
        "pyyaml",
        "jinja2"
    ],
    extras_require={"test": ["pytest"]},
    python_requires='>=3.10',
)
