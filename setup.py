from setuptools import setup, find_packages

def parse_requirements(requirements):
    with open(requirements) as f:
        return [l.strip('\n') for l in f if l.strip('\n') and not l.startswith('#')]

requirements = parse_requirements("requirements.txt")

setup(
    name='paperbook_backend',
    version='0.1.0',
    install_requires=requirements,
    extras_require={
        "test": [
            "pytest>=7.4",
            "httpx>=0.25",
        ],
    },
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "paperbook_backend": ["error_registry.yaml"],
    },
    include_package_data=True,
    python_requires=">=3.10",
)
