import sys

from jdkmeta.assemble import assemble_platform
from jdkmeta.common import default_session, eprint, format_error_chain, platform_id
from jdkmeta.errors import JdkMetaError
from jdkmeta.hashing import hasher_from_env
from jdkmeta.model.catalog import JavaSources
from jdkmeta.vendor import VENDORS


def main():
    sess = default_session()

    try:
        hasher = hasher_from_env()
        catalogs = assemble_platform(sess, VENDORS, hasher)
    except JdkMetaError as e:
        eprint(format_error_chain(e))
        sys.exit(1)

    sources = JavaSources({platform_id(): catalogs})
    print(sources.json())


if __name__ == "__main__":
    main()
