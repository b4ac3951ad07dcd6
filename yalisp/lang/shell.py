"""Handles interactive/command-line mode for yalisp interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """YALisp interpreter shell."""
    intro = "Welcome to Yet Another Lisp (YALisp)!\nType in lisp expressions, and I'll execute them :3"
    prompt = "(yalisp) > "

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.sess.stdout = self.stdout
        self.sess.error_handler.stream = self.stdout

        self.line_num = 0

    def default(self, line):
        """Parses, evaluates and prints a single expression."""
        self.line_num += 1
        self.sess.add(line, self.line_num)
        self.sess.run()

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Each line is read as one expression and its value is printed.\n\n"
              "Values are integers (42) and strings (\"hi\"). Parenthesized forms call one of \n"
              "three built-in operators:\n"
              "  (+ 1 2 3)            => 6\n"
              "  (- 10 1 2)           => 7\n"
              "  (concat \"a\" \"b\")     => \"ab\"\n\n"
              "Type 'exit' or press Ctrl-D to leave.", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
