"""Tests for lib/firewall.py - host rule application and reset."""

import pytest

from pinc_provision.lib.command import CommandError
from pinc_provision.lib.firewall import apply_rules, host_firewall_scope, reset_host_firewall, save_rules

RESET_CALLS = [
    ["iptables", "-t", "filter", "-F"],
    ["iptables", "-t", "filter", "-X"],
    ["iptables", "-t", "nat", "-F"],
    ["iptables", "-t", "nat", "-X"],
    ["iptables", "-t", "mangle", "-F"],
    ["iptables", "-t", "mangle", "-X"],
    ["iptables", "-P", "INPUT", "ACCEPT"],
    ["iptables", "-P", "FORWARD", "ACCEPT"],
    ["iptables", "-P", "OUTPUT", "ACCEPT"],
]


class TestResetHostFirewall:
    def test_flushes_tables_and_sets_policies(self, fake_cmd):
        reset_host_firewall()
        assert fake_cmd.calls == RESET_CALLS


class TestApplyAndSave:
    def test_script_is_piped_to_sh(self, fake_cmd):
        script = "iptables -t nat -A POSTROUTING -o eth0 -j MASQUERADE\n"
        apply_rules(script)
        assert fake_cmd.calls == [["sh", "-e"]]
        assert fake_cmd.inputs == [script]

    def test_save_returns_iptables_save_output(self, fake_cmd):
        fake_cmd.respond(["iptables-save"], "*nat\nCOMMIT\n")
        assert save_rules() == "*nat\nCOMMIT\n"


class TestHostFirewallScope:
    def test_resets_before_and_after(self, fake_cmd):
        with host_firewall_scope():
            apply_rules("true\n")
        assert fake_cmd.calls == RESET_CALLS + [["sh", "-e"]] + RESET_CALLS

    def test_resets_after_failure(self, fake_cmd):
        fake_cmd.fail(["sh"])
        with pytest.raises(CommandError):
            with host_firewall_scope():
                apply_rules("false\n")
        assert fake_cmd.calls[-len(RESET_CALLS):] == RESET_CALLS
