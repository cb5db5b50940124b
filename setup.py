from setuptools import setup


setup(
    name="ta-finder",
    version="0.1.0",
    description="Fuzzy search over teaching-assistant applicant survey exports",
    packages=["ta_finder"],
    install_requires=[
        "pandas",
        "chardet",
        "streamlit",
    ],
)
