NAMES = {
    'sample': 'Test1',
    'rg': 'Test1',
}

CONFIG = {
    'algorithm': {
        'num_cores': 4,
        'platform': 'ILLUMINA',
    },
    'resources': {
        'picard': {
            'jvm_opts': ['-Xmx4g'],
        },
    },
}

DATA = {
    'rgnames': NAMES,
    'files': [
        '/ngsmap/tests/data/reads/Test1_1.fastq.gz',
        '/ngsmap/tests/data/reads/Test1_2.fastq.gz'
    ],
    'reference': {
        'fasta': {
            'base': '/ngsmap/tests/data/genomes/toy.fa'
        },
    },
    'out_prefix': '/ngsmap/tests/test_output/Test1',
    'dirs': {
        'work': '/ngsmap/tests/test_output',
    },
    'config': CONFIG,
}
