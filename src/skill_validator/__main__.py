from skill_validator.cli import app

app(prog_name="validate-skills")
