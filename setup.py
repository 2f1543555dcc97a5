from setuptools import setup


setup(
    name='sham',
    url='http://github.com/alecthomas/sham',
    download_url='http://github.com/alecthomas/sham',
    version='0.1',
    description='A minimalist mock object library.',
    license='BSD',
    platforms=['any'],
    packages=['sham', 'sham.tests'],
    author='Alec Thomas',
    author_email='alec@swapoff.org',
    python_requires='>=3.8',
    extras_require={
        'test': [
            'pytest >= 6.0',
        ],
    },
    )
