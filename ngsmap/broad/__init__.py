"""Work with Broad's Picard Java library from Python.

  Picard -- BAM manipulation and analysis library.
"""
from ngsmap.broad import picardrun
from ngsmap.pipeline import config_utils
from ngsmap.provenance import do

class PicardRunner:
    """Simplify running Picard commandline tools.
    """
    def __init__(self, picard_cmd, config, data=None):
        resources = config_utils.get_resources("picard", config)
        self._jvm_opts = [str(x) for x in resources.get("jvm_opts", [config_utils.DEFAULT_JAVA_OPTS])]
        self._picard_cmd = picard_cmd
        self._config = config
        self._data = data

    def run_fn(self, name, *args, **kwds):
        """Run pre-built functionality that uses Picard by name.

        See the picardrun module for available functions.
        """
        fn = getattr(picardrun, name, None)
        assert fn is not None, "Could not find function %s in %s" % (name, picardrun)
        return fn(self, *args, **kwds)

    def cl_picard(self, command, options):
        """Prepare a Picard commandline.

        JVM options go ahead of the tool name, as accepted by the picard
        wrapper script.
        """
        options = ["%s=%s" % (x, y) for x, y in options]
        return [self._picard_cmd] + self._jvm_opts + [command] + options

    def run(self, command, options, checks=None):
        """Run a Picard command with the provided option pairs.
        """
        cl = self.cl_picard(command, options)
        do.run(cl, "Picard {0}".format(command), self._data, checks)

def runner_from_config(data):
    """Create a Picard runner from the configured `picard` program and JVM options.
    """
    config = data["config"]
    return PicardRunner(config_utils.get_program("picard", config), config, data)
