"Setup package."
from setuptools import find_packages, setup

setup(
    name="saftstate",
    version="1.0.1",
    description="Thermodynamic state resolution with Helmholtz energy equations of state.",
    author="Wildson Lima",
    author_email="wil_bbl@hotmail.com",
    license="GNU",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=["numpy", "absl-py", "ml-collections"],
    extras_require={"test": ["pytest", "jax"]},
    zip_safe=False,
)
