"""Install the showcase submission review package."""

from setuptools import setup, find_packages

setup(
    name='showcase-review',
    version='0.1.0',
    package_dir={'': 'core'},
    packages=find_packages(where='./core'),
    zip_safe=False,
    python_requires='>=3.7',
    install_requires=[
        'arxiv-base>=0.16.6',
        'flask<2.3',
        'werkzeug<2.3',  # arxiv-base imports werkzeug.urls.url_encode (removed in 3.0)
        'jinja2<3.1',  # arxiv-base imports jinja2.Markup (removed in 3.1)
        'python-dateutil',
        'retry>=0.9.2',
        'pytz'
    ],
    extras_require={
        'test': ['pytest', 'mimesis'],
    },
    include_package_data=True
)
