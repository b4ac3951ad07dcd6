"""Yet Another Lisp: a minimal interpreter for a Lisp-like expression language.

Basic program flow, one line of input at a time:
    1. Parser: produces an AST from the line by recursive descent (see yalisp/core/lexical.py)
        - only the first expression on the line is read
    2. Evaluator: walks the AST, dispatching parenthesized forms to the built-in operators +, - and concat
       (see yalisp/core/evaluator.py)
    3. Printer: the resulting integer or string is printed, or the error that stopped parsing/evaluation
       (see yalisp/core/values.py and yalisp/lang/error.py)

"""
