import json
import os
from typing import Dict, List

from doubler.models import OutputFormat


class RunnerConfig:
    config_version = "v0.0.1" # future proofing
    executable: str
    args: List[str] = []
    stdin_file: str | None = None # piped to the program's stdin
    keyboard_input: str | None = None # raw key bytes sent after startup
    cols: int = 80
    rows: int = 25
    output: str = OutputFormat.HEX.value
    timeout: int = 5000 # milliseconds
    debug_raw: bool = False
    env_vars: Dict[str, str] = {}
    debugging = False

    def __init__(self, executable: str, args: List[str] = [], env_vars: Dict[str, str] = {}):
        self.executable = executable
        self.args = list(args)
        self.env_vars = dict(env_vars)

    def validate(self):
        if not OutputFormat.is_valid(self.output):
            raise ValueError(f"Unknown output format: {self.output}, expected one of {[str(f) for f in OutputFormat]}")
        for key in ('cols', 'rows', 'timeout'):
            if getattr(self, key) <= 0:
                raise ValueError(f"{key} must be positive, got {getattr(self, key)}")

    def child_env(self) -> Dict[str, str]:
        env = os.environ.copy()
        env['TERM'] = 'xterm' # consistent terminal type across platforms
        env.update(self.env_vars)
        return env

    @classmethod
    def from_json(cls, json: Dict) -> "RunnerConfig":
        if not isinstance(json, dict):
            raise ValueError(f"Config must be a JSON object, got {type(json).__name__}")
        if 'executable' not in json:
            raise ValueError("Missing required key: executable")

        c = RunnerConfig(json['executable'], json.get('args', []), json.get('env_vars', {}))
        c.stdin_file = json.get('stdin_file', None)
        c.keyboard_input = json.get('keyboard_input', None)
        c.cols = int(json.get('cols', 80))
        c.rows = int(json.get('rows', 25))
        c.output = json.get('output', OutputFormat.HEX.value)
        c.timeout = int(json.get('timeout', 5000))
        c.debug_raw = json.get('debug_raw', False)
        c.debugging = json.get('debugging', False)
        c.validate()
        return c

    def to_json(self):
        return {
            'executable': self.executable,
            'args': self.args,
            'stdin_file': self.stdin_file,
            'keyboard_input': self.keyboard_input,
            'cols': self.cols,
            'rows': self.rows,
            'output': self.output,
            'timeout': self.timeout,
            'debug_raw': self.debug_raw,
            'env_vars': self.env_vars,
            'debugging': self.debugging,
        }

    @staticmethod
    def load_from_file(absolute_path: str) -> "RunnerConfig":
        """Read a runner config file; a malformed one is reported with its path."""
        with open(absolute_path) as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Runner config {absolute_path} is not valid JSON: {e}")
        return RunnerConfig.from_json(data)

    @staticmethod
    def load_configuration(cfg_input: str) -> "RunnerConfig":
        """
        Resolve the single pty_runner argument into a RunnerConfig.

        Args:
            cfg_input: a runner config file, a directory holding config.json, or an inline JSON blob

        Returns:
            The validated runner configuration

        Raises:
            ValueError: If no runner config is found, it is not JSON, or it fails validation
        """
        if os.path.isdir(cfg_input):
            cfg_input = os.path.join(cfg_input, 'config.json')
            if not os.path.exists(cfg_input):
                raise ValueError(f"No runner config.json in directory: {os.path.dirname(cfg_input)}")

        if os.path.isfile(cfg_input):
            return RunnerConfig.load_from_file(cfg_input)

        # anything that is not a path is taken as an inline config
        try:
            data = json.loads(cfg_input)
        except json.JSONDecodeError as e:
            raise ValueError(f"Runner config is neither a file nor valid JSON: {e}")
        return RunnerConfig.from_json(data)
