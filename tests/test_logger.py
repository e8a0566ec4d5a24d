from fks_manager.logger import DeployLogger


def test_log_file_layout_and_footer(tmp_path):
    logger = DeployLogger("deploy", log_dir=tmp_path)
    logger.log("hello")
    logger.close()

    path = logger.log_path
    assert path.parent.parent == tmp_path
    assert path.name.endswith("_deploy.log")

    content = path.read_text()
    assert "Operation: deploy" in content
    assert "[INFO] hello" in content
    assert "Status: SUCCESS" in content


def test_errors_mark_run_failed(tmp_path):
    with DeployLogger("deploy", log_dir=tmp_path) as logger:
        logger.log_error("auth deploy failed", context="auth.example.com")

    content = logger.log_path.read_text()
    assert "ERROR OCCURRED" in content
    assert "Context: auth.example.com" in content
    assert "Status: FAILED" in content


def test_output_always_reaches_file_but_not_quiet_console(tmp_path, capsys):
    logger = DeployLogger("health-check", log_dir=tmp_path, quiet=True)
    logger.log("probing")
    logger.log_output("\x1b[32mcontainer up\x1b[0m", show=True)
    logger.close()

    assert capsys.readouterr().out == ""
    content = logger.log_path.read_text()
    assert "  [stdout] container up" in content
    assert "\x1b" not in content


def test_debug_only_in_verbose(tmp_path, capsys):
    quiet = DeployLogger("a", log_dir=tmp_path)
    quiet.log_command("ssh host true")
    quiet.close()
    assert "Executing" not in capsys.readouterr().out
    assert "[DEBUG] Executing: ssh host true" in quiet.log_path.read_text()
