"""Standard UNIX-style process exit codes."""

from enum import IntEnum


class ExitCode(IntEnum):
    """
    Enumeration of process termination codes.

    Any value other than SUCCESS halts a chain of commands.
    """

    SUCCESS = 0
    FAILURE = 1
    INVALID = 2  # misuse of shell builtins or invalid arguments
    CANNOT_EXECUTE = 126  # command found but not executable
    COMMAND_NOT_FOUND = 127
    TERMINATED_BY_SIGNAL = 128  # base value, add the signal number
    SIGHUP = 129
    SIGINT = 130
    SIGQUIT = 131
    SIGILL = 132
    SIGTRAP = 133
    SIGABRT = 134
    SIGBUS = 135
    SIGFPE = 136
    SIGKILL = 137
    SIGUSR1 = 138
    SIGSEGV = 139
    SIGUSR2 = 140
    SIGPIPE = 141
    SIGALRM = 142
    SIGTERM = 143
    SIGSTKFLT = 144
    SIGCHLD = 145
    SIGCONT = 146
    SIGSTOP = 147
    SIGTSTP = 148
    SIGTTIN = 149
    SIGTTOU = 150
    SIGURG = 151
    SIGXCPU = 152
    SIGXFSZ = 153
    SIGVTALRM = 154
    SIGPROF = 155
    SIGWINCH = 156
    SIGIO = 157
    SIGPWR = 158
    SIGSYS = 159
    EXIT_STATUS_OUT_OF_RANGE = 255

    @classmethod
    def from_signal(cls, signum: int) -> int:
        """Get the shell exit status for a process killed by a signal."""
        return cls.TERMINATED_BY_SIGNAL + signum

    @classmethod
    def from_returncode(cls, returncode: int) -> int:
        """
        Convert a subprocess return code to the shell convention.

        Python reports a process killed by signal N as -N; shells report 128+N.
        """
        if returncode < 0:
            return cls.from_signal(-returncode)
        return returncode


def is_success(code: int | None) -> bool:
    """Return True if the code means success."""
    return code == ExitCode.SUCCESS
