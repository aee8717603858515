import argparse
import logging
import random

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from config import Config
from schemas import DifferentiationInput, GenerationInput

# The differentiation engine
from Expressions import (
    ExpressionError,
    Variable,
    compute_derivative,
    differentiate,
    display,
    to_latex,
    to_sympy,
    to_tree,
)

# The random expression generator
from generate_expression import generate_random_expression, sample_expressions

# -------------------------------------------------------------------
# Setup
# -------------------------------------------------------------------
logging.basicConfig(level=Config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

generator_rng = random.Random(Config.GENERATOR_SEED)


def describe(expr):
    return {
        "display": display(expr),
        "latex": to_latex(expr),
        "tree": to_tree(expr),
    }


def demo_lines(variable=Config.DEFAULT_VARIABLE):
    """One ``expression \\t:\\t derivative`` line per showcase expression."""
    wrt = Variable(variable)
    return [
        f"{display(expr)}\t:\t{display(differentiate(expr, wrt))}"
        for expr in sample_expressions(variable)
    ]


# -------------------------------------------------------------------
# Health Endpoints
# -------------------------------------------------------------------
@app.get("/ping")
async def ping():
    logger.info("Uptime ping received")
    return {"status": "ok", "message": "Backend is alive"}


@app.get("/uptime")
async def uptime():
    return {"status": "alive"}


# -------------------------------------------------------------------
# API Endpoints
# -------------------------------------------------------------------
@app.post("/differentiate")
async def differentiate_endpoint(input_data: DifferentiationInput):
    try:
        expression = input_data.expression.to_expression()
        logger.debug(f"Differentiate request: {expression} w.r.t. {input_data.variable}")
        result = compute_derivative(expression, input_data.variable)
    except ExpressionError as e:
        logger.warning(f"Rejected differentiation request: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    derivative = result["derivative"]
    return {
        "variable": input_data.variable,
        "expression": describe(expression),
        "derivative": describe(derivative),
        "derivative_sympy": str(to_sympy(derivative)),
        "execution_time_ms": result["execution_time_ms"],
        "peak_memory_bytes": result["peak_memory_bytes"],
    }


@app.post("/generate")
async def generate_expression_endpoint(input_data: GenerationInput):
    try:
        expr, expr_str, expr_latex = generate_random_expression(
            variables=input_data.variables,
            num_terms=input_data.num_terms,
            max_depth=input_data.max_depth,
            rng=generator_rng,
        )
    except (ExpressionError, ValueError) as e:
        logger.warning(f"Rejected generation request: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error("Generation error", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Generation failed: {str(e)}"
        )

    return {
        "expression_string": expr_str,
        "expression_latex": expr_latex,
        "expression_tree": to_tree(expr),
    }


@app.get("/samples")
async def samples():
    return {"lines": demo_lines()}


# -------------------------------------------------------------------
# Command Line
# -------------------------------------------------------------------
def main(argv=None):
    parser = argparse.ArgumentParser(description="Symbolic differentiation backend")
    parser.add_argument("command", nargs="?", choices=["demo", "serve"], default="demo",
                        help="print the sample derivatives (default) or run the HTTP server")
    args = parser.parse_args(argv)

    if args.command == "serve":
        import uvicorn
        uvicorn.run(app, host=Config.HOST, port=Config.PORT, log_level=Config.LOG_LEVEL.lower())
        return

    for line in demo_lines():
        print(line)


if __name__ == "__main__":
    main()
