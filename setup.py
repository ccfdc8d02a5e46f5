"""Setup configuration for thumbcache."""

from setuptools import find_packages, setup

setup(
    name="thumbcache",
    version="0.1.0",
    description="Thumbnail cache: memoized S3 thumbnails with source change detection",
    python_requires=">=3.11",
    packages=find_packages(where="src", include=["thumbcache*"]),
    package_dir={"": "src"},
    install_requires=[
        "httpx>=0.27.0",
        "pydantic>=2.6.0",
        "pydantic-settings>=2.1.0",
        "boto3>=1.34.0",
    ],
    entry_points={
        "console_scripts": [
            "thumbcache=thumbcache.cli:cli_entry",
        ],
    },
    extras_require={
        "dev": [
            "pytest>=8.0.0",
            "pytest-asyncio>=0.23.0",
            "pytest-mock>=3.12.0",
            "respx>=0.21.0",
            "moto[dynamodb,s3]>=5.0.0",
            "python-dotenv>=1.0.0",
        ],
    },
)
